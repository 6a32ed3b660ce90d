"""Command line driver that builds a small C library with a :class:`Builder`."""
from __future__ import annotations

from argparse import ArgumentParser, Namespace
from pathlib import Path
from typing import Callable, Dict, List, Sequence, Tuple
import os
import sys

from core.console import Console

from .builder import Builder
from .config import (
    CONFIG_ENV,
    DEFAULT_CONFIG_NAME,
    DriverLayout,
    LoadedConfig,
    executable_stems,
    is_cxx_source,
    load_settings,
)
from .errors import BuildError
from .filesystem import change_directory, change_directory_to_program_dir, set_console_code_page

INVOKE_TOKEN = "invoke"

Step = Callable[[Builder, DriverLayout], None]


def _object_name(source: str) -> str:
    return Path(source).with_suffix(".o").name


def _link_flags(layout: DriverLayout) -> str:
    # GCC on Windows needs -l switches after the source files.
    flags: List[str] = [f"-I{directory}" for directory in layout.include_dirs]
    flags.append("-L.")
    flags.append(f"-l{layout.library}")
    flags.extend(f"-l{name}" for name in layout.libraries)
    return " ".join(flags)


def _executables(builder: Builder, sources: Sequence[str]) -> List[Tuple[str, str]]:
    names = executable_stems(sources)
    return [(source, builder.executable_file_name(name)) for source, name in zip(sources, names)]


def _compile_executables(builder: Builder, layout: DriverLayout, sources: Sequence[str]) -> None:
    flags = _link_flags(layout)
    for source, executable in _executables(builder, sources):
        compile_step = builder.cxx if is_cxx_source(source) else builder.cc
        compile_step('-o "%s" "%s" %s', executable, source, flags)


def _remove_executables(builder: Builder, sources: Sequence[str]) -> None:
    for _, executable in _executables(builder, sources):
        builder.remove(executable)


def build_library(builder: Builder, layout: DriverLayout) -> None:
    objects = [_object_name(source) for source in layout.sources]
    builder.cc("-fPIC -c %s", " ".join(layout.sources))
    builder.ar("cr %s %s", layout.archive, " ".join(objects))


def clean_library(builder: Builder, layout: DriverLayout) -> None:
    builder.remove(layout.archive)
    for source in layout.sources:
        builder.remove(_object_name(source))


def build_tests(builder: Builder, layout: DriverLayout) -> None:
    _compile_executables(builder, layout, layout.tests)


def clean_tests(builder: Builder, layout: DriverLayout) -> None:
    _remove_executables(builder, layout.tests)


def build_examples(builder: Builder, layout: DriverLayout) -> None:
    _compile_executables(builder, layout, layout.examples)


def clean_examples(builder: Builder, layout: DriverLayout) -> None:
    _remove_executables(builder, layout.examples)


STEPS: Dict[str, Step] = {
    "build": build_library,
    "clean": clean_library,
    "build-tests": build_tests,
    "clean-tests": clean_tests,
    "build-examples": build_examples,
    "clean-examples": clean_examples,
}


def print_help(program: str) -> None:
    print("Available commands:")
    for name in ("help", *STEPS):
        print(f"\t{name}")
    print()
    print("Commands are dry-run by default.")
    print(f"To actually invoke, specify `{INVOKE_TOKEN}` before the first command.")
    print(f"Example: {program} {INVOKE_TOKEN} build")


def _parse_arguments(argv: Sequence[str]) -> Tuple[Namespace, List[str]]:
    parser = ArgumentParser(prog="buildscript", description="Build-script driver for a small C library")
    parser.add_argument(
        "--config",
        "-c",
        type=Path,
        action="append",
        default=[],
        help=f"Configuration file(s) to merge (default: ${CONFIG_ENV} or ./{DEFAULT_CONFIG_NAME})",
    )
    parser.add_argument("--directory", "-C", type=Path, help="Change to this directory before building")
    parser.add_argument(
        "--log",
        "-l",
        choices=list(Console.LEVELS),
        help="Set log level (default: error)",
    )
    parser.add_argument("--verbose", "-v", action="store_true", help="Enable debug output")
    parser.add_argument("commands", nargs="*", help="Commands to run, in order")
    return parser.parse_known_intermixed_args(list(argv))


def _requested_configs(explicit: Sequence[Path]) -> List[Path] | None:
    """Absolute config paths from the command line or environment, if any.

    Both are relative to the directory the driver was started in.
    """
    if explicit:
        return [path.resolve() for path in explicit]
    env_value = os.environ.get(CONFIG_ENV)
    if env_value:
        return [Path(part.strip()).resolve() for part in env_value.split(os.pathsep) if part.strip()]
    return None


def _default_configs() -> List[Path]:
    default = Path(DEFAULT_CONFIG_NAME)
    return [default] if default.is_file() else []


def _load_configuration(paths: Sequence[Path], console: Console) -> LoadedConfig:
    for path in paths:
        console.debug(f"Loading config file: {path}")
    return load_settings(paths)


def _apply_os_macro(builder: Builder) -> None:
    if builder.os_family is None:
        return
    macro = builder.os_family.macro
    builder.cc_command = f"{builder.cc_command} {macro}"
    builder.cxx_command = f"{builder.cxx_command} {macro}"


def main(argv: Sequence[str] | None = None, *, program: str | None = None) -> int:
    """Run the driver; ``program`` makes the driver change into its directory."""

    args, unknown = _parse_arguments(sys.argv[1:] if argv is None else argv)
    console = Console.from_flags(args.log, args.verbose, default="error")
    display_name = program or "buildscript"
    requested_configs = _requested_configs(args.config)

    try:
        set_console_code_page("utf-8")
        if args.directory is not None:
            change_directory(args.directory)
        elif program is not None:
            change_directory_to_program_dir([program])

        try:
            config_paths = requested_configs if requested_configs is not None else _default_configs()
            loaded = _load_configuration(config_paths, console)
        except (OSError, TypeError, ValueError) as exc:
            console.error(f"Failed to load configuration: {exc}")
            return 1

        builder = loaded.settings.apply(Builder(console=console))
        _apply_os_macro(builder)

        if not args.commands and not unknown:
            print_help(display_name)
            return 0

        # Option-like tokens argparse does not know are reported before the commands run.
        for token in unknown:
            print(f"Unknown command: {token}")
        for token in args.commands:
            if token == INVOKE_TOKEN:
                builder.dry_run = False
            elif token == "help":
                print_help(display_name)
            elif token in STEPS:
                console.info(f"Running {token}")
                STEPS[token](builder, loaded.layout)
            else:
                print(f"Unknown command: {token}")
        return 0
    except BuildError as exc:
        console.error(str(exc))
        return 1


__all__ = [
    "INVOKE_TOKEN",
    "STEPS",
    "build_examples",
    "build_library",
    "build_tests",
    "clean_examples",
    "clean_library",
    "clean_tests",
    "main",
    "print_help",
]
