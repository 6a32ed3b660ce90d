"""Builder settings loaded from configuration files."""
from __future__ import annotations

from collections import Counter
from dataclasses import dataclass, field, fields
from pathlib import Path
from typing import Any, Dict, Iterable, List, Mapping, Sequence

from core.config_loader import load_config_files, normalize_string_list

from .builder import Builder

CONFIG_ENV = "BUILDSCRIPT_CONFIG"
DEFAULT_CONFIG_NAME = "build.toml"
CXX_SUFFIXES = frozenset({".cc", ".cpp", ".cxx", ".c++", ".C"})


@dataclass(frozen=True, slots=True)
class ToolchainPreset:
    name: str
    cc: str
    cxx: str
    ar: str
    ld: str


TOOLCHAINS: Dict[str, ToolchainPreset] = {
    "gcc": ToolchainPreset(name="gcc", cc="gcc", cxx="g++", ar="ar", ld="ld"),
    "clang": ToolchainPreset(name="clang", cc="clang", cxx="clang++", ar="ar", ld="ld"),
    "llvm": ToolchainPreset(name="llvm", cc="clang", cxx="clang++", ar="llvm-ar", ld="ld.lld"),
}


def _optional_str(data: Mapping[str, Any], key: str) -> str | None:
    value = data.get(key)
    if value is None:
        return None
    if not isinstance(value, str):
        raise TypeError(f"builder.{key} must be a string")
    return value


def _optional_bool(data: Mapping[str, Any], key: str) -> bool | None:
    value = data.get(key)
    if value is None:
        return None
    if not isinstance(value, bool):
        raise TypeError(f"builder.{key} must be a boolean")
    return value


@dataclass(slots=True)
class BuilderSettings:
    """Values from a ``[builder]`` table; ``None`` means "keep the default"."""

    dry_run: bool | None = None
    print_command_to_stdout: bool | None = None
    cc_command: str | None = None
    cxx_command: str | None = None
    ar_command: str | None = None
    ld_command: str | None = None
    c_language_standard: str | None = None
    cxx_language_standard: str | None = None
    move_command: str | None = None
    copy_command: str | None = None
    remove_command: str | None = None

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> "BuilderSettings":
        section = data.get("builder", {})
        if not isinstance(section, Mapping):
            raise TypeError("builder section must be a mapping")

        allowed_keys = {
            "dry_run",
            "print_command_to_stdout",
            "toolchain",
            "cc",
            "cxx",
            "ar",
            "ld",
            "c_standard",
            "cxx_standard",
            "move",
            "copy",
            "remove",
        }
        unknown = {str(key) for key in section.keys() if str(key) not in allowed_keys}
        if unknown:
            joined = ", ".join(sorted(unknown))
            raise ValueError(f"builder section contains unknown keys: {joined}")

        preset: ToolchainPreset | None = None
        toolchain = _optional_str(section, "toolchain")
        if toolchain is not None:
            preset = TOOLCHAINS.get(toolchain.strip().lower())
            if preset is None:
                available = ", ".join(sorted(TOOLCHAINS))
                raise ValueError(f"Unknown toolchain '{toolchain}'. Available: {available}")

        def tool(key: str) -> str | None:
            explicit = _optional_str(section, key)
            if explicit is not None:
                return explicit
            return getattr(preset, key) if preset else None

        return cls(
            dry_run=_optional_bool(section, "dry_run"),
            print_command_to_stdout=_optional_bool(section, "print_command_to_stdout"),
            cc_command=tool("cc"),
            cxx_command=tool("cxx"),
            ar_command=tool("ar"),
            ld_command=tool("ld"),
            c_language_standard=_optional_str(section, "c_standard"),
            cxx_language_standard=_optional_str(section, "cxx_standard"),
            move_command=_optional_str(section, "move"),
            copy_command=_optional_str(section, "copy"),
            remove_command=_optional_str(section, "remove"),
        )

    def apply(self, builder: Builder) -> Builder:
        """Assign every configured value onto ``builder``."""
        for item in fields(self):
            value = getattr(self, item.name)
            if value is not None:
                setattr(builder, item.name, value)
        return builder


def is_cxx_source(source: str) -> bool:
    return Path(source).suffix in CXX_SUFFIXES


def executable_stems(sources: Sequence[str], *, field_name: str = "sources") -> List[str]:
    """Return the executable base name each of ``sources`` builds.

    Sources sharing a stem are told apart by language, so ``example.c`` and
    ``example.cc`` build ``example_c`` and ``example_cxx``.
    """

    stems = [Path(source).stem for source in sources]
    counts = Counter(stems)
    names: List[str] = []
    for source, stem in zip(sources, stems):
        if counts[stem] > 1:
            stem = f"{stem}_cxx" if is_cxx_source(source) else f"{stem}_c"
        names.append(stem)

    duplicates = sorted(name for name, count in Counter(names).items() if count > 1)
    if duplicates:
        joined = ", ".join(duplicates)
        raise ValueError(f"{field_name} build the same executable more than once: {joined}")
    return names


@dataclass(slots=True)
class DriverLayout:
    """Sources the example build driver compiles, from a ``[layout]`` table."""

    library: str = "greet"
    sources: List[str] = field(default_factory=lambda: ["greet.c"])
    tests: List[str] = field(default_factory=lambda: ["test_greet.c"])
    examples: List[str] = field(default_factory=lambda: ["example.c", "example.cc"])
    include_dirs: List[str] = field(default_factory=lambda: ["."])
    libraries: List[str] = field(default_factory=list)

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> "DriverLayout":
        section = data.get("layout", {})
        if not isinstance(section, Mapping):
            raise TypeError("layout section must be a mapping")

        allowed_keys = {"library", "sources", "tests", "examples", "include_dirs", "libraries"}
        unknown = {str(key) for key in section.keys() if str(key) not in allowed_keys}
        if unknown:
            joined = ", ".join(sorted(unknown))
            raise ValueError(f"layout section contains unknown keys: {joined}")

        layout = cls()
        library = section.get("library")
        if library is not None:
            if not isinstance(library, str) or not library.strip():
                raise TypeError("layout.library must be a non-empty string")
            layout.library = library.strip()
        for key in ("sources", "tests", "examples", "include_dirs", "libraries"):
            if key in section:
                setattr(layout, key, normalize_string_list(section[key], field_name=f"layout.{key}"))
        for key in ("tests", "examples"):
            executable_stems(getattr(layout, key), field_name=f"layout.{key}")
        return layout

    @property
    def archive(self) -> str:
        return f"lib{self.library}.a"


@dataclass(slots=True)
class LoadedConfig:
    settings: BuilderSettings
    layout: DriverLayout


def load_settings(paths: Iterable[Path]) -> LoadedConfig:
    """Merge the configuration files in ``paths`` and parse both tables."""

    data = load_config_files(paths)
    return LoadedConfig(
        settings=BuilderSettings.from_mapping(data),
        layout=DriverLayout.from_mapping(data),
    )


__all__ = [
    "CONFIG_ENV",
    "CXX_SUFFIXES",
    "DEFAULT_CONFIG_NAME",
    "TOOLCHAINS",
    "BuilderSettings",
    "DriverLayout",
    "LoadedConfig",
    "ToolchainPreset",
    "executable_stems",
    "is_cxx_source",
    "load_settings",
]
