from __future__ import annotations

from io import StringIO
from pathlib import Path
import copy
import os
import shutil
import tempfile
import unittest
from unittest.mock import patch

from core.console import Console

from buildscript.src.builder import Builder, assemble_command, format_parameters
from buildscript.src.command_runner import RecordingCommandRunner
from buildscript.src.errors import (
    CommandFormatError,
    OutOfMemoryError,
    ShellInvocationError,
    UnknownOSError,
)
from buildscript.src.platform import OSFamily


def _quiet_builder(**kwargs) -> Builder:
    kwargs.setdefault("print_command_to_stdout", False)
    kwargs.setdefault("os_family", OSFamily.LINUX)
    return Builder(**kwargs)


class DefaultsTests(unittest.TestCase):
    def test_tool_defaults(self) -> None:
        b = _quiet_builder()
        self.assertTrue(b.dry_run)
        self.assertEqual(b.cc_command, "gcc")
        self.assertEqual(b.c_language_standard, "")
        self.assertEqual(b.cxx_command, "g++")
        self.assertEqual(b.cxx_language_standard, "")
        self.assertEqual(b.ar_command, "ar")
        self.assertEqual(b.ld_command, "ld")
        self.assertEqual(b.last_exec_command, "")

    def test_echo_enabled_by_default(self) -> None:
        self.assertTrue(Builder(os_family=OSFamily.LINUX).print_command_to_stdout)

    def test_posix_file_commands(self) -> None:
        for family in (OSFamily.MACOS, OSFamily.LINUX, OSFamily.UNIX):
            with self.subTest(family=family):
                b = _quiet_builder(os_family=family)
                self.assertEqual(b.move_command, "mv")
                self.assertEqual(b.copy_command, "cp")
                self.assertEqual(b.remove_command, "rm -f")

    def test_windows_file_commands(self) -> None:
        b = _quiet_builder(os_family=OSFamily.WINDOWS)
        self.assertEqual(b.move_command, "move")
        self.assertEqual(b.copy_command, "copy")
        self.assertEqual(b.remove_command, "del")

    def test_explicit_file_command_wins(self) -> None:
        b = _quiet_builder(remove_command="rm -rf")
        self.assertEqual(b.remove_command, "rm -rf")
        self.assertEqual(b.move_command, "mv")

    def test_host_family_used_when_not_given(self) -> None:
        with patch("buildscript.src.builder.host_os_family", return_value=OSFamily.WINDOWS):
            b = Builder(print_command_to_stdout=False)
        self.assertIs(b.os_family, OSFamily.WINDOWS)
        self.assertTrue(b.is_windows())
        self.assertFalse(b.is_linux())

    def test_unknown_os_fails_construction(self) -> None:
        with patch("buildscript.src.builder.host_os_family", return_value=None):
            with self.assertRaises(UnknownOSError) as ctx:
                Builder()
        self.assertEqual(str(ctx.exception), "unknown OS")

    def test_copies_are_independent(self) -> None:
        b = _quiet_builder()
        b.cc("-c %s", "a.c")
        b2 = copy.copy(b)
        self.assertEqual(b2, b)
        b2.cc("-c %s", "b.c")
        self.assertEqual(b.last_exec_command, "gcc -c a.c")
        self.assertEqual(b2.last_exec_command, "gcc -c b.c")


class CommandAssemblyTests(unittest.TestCase):
    def setUp(self) -> None:
        self.b = _quiet_builder()

    def test_cc(self) -> None:
        self.b.cc("-c %s", "foo.c")
        self.assertEqual(self.b.last_exec_command, "gcc -c foo.c")

    def test_c_language_standard(self) -> None:
        self.b.c_language_standard = "c17"
        self.b.cc("-c foo.c")
        self.assertEqual(self.b.last_exec_command, "gcc -std=c17 -c foo.c")
        self.assertEqual(self.b.c_compiler, "gcc -std=c17")

    def test_cxx_and_standard(self) -> None:
        self.b.cxx("-o Test_Builder Test_Builder.cc Builder.cc")
        self.assertEqual(self.b.last_exec_command, "g++ -o Test_Builder Test_Builder.cc Builder.cc")
        self.b.cxx_language_standard = "c++17"
        self.b.cxx("-o Test_Builder Test_Builder.cc Builder.cc")
        self.assertEqual(
            self.b.last_exec_command,
            "g++ -std=c++17 -o Test_Builder Test_Builder.cc Builder.cc",
        )

    def test_c_standard_does_not_leak_into_cxx(self) -> None:
        self.b.c_language_standard = "c11"
        self.b.cxx("-c a.cc")
        self.assertEqual(self.b.last_exec_command, "g++ -c a.cc")

    def test_standard_follows_modified_tool_command(self) -> None:
        self.b.cxx_command = "g++ -DLINUX"
        self.b.cxx_language_standard = "c++17"
        self.b.cxx("-o %s -c %s", "x.o", "x.cc")
        self.assertEqual(self.b.last_exec_command, "g++ -DLINUX -std=c++17 -o x.o -c x.cc")

    def test_ar_and_ld(self) -> None:
        self.b.ar("cru %s %s", "libbuild.a", "Builder.o")
        self.assertEqual(self.b.last_exec_command, "ar cru libbuild.a Builder.o")
        self.b.ld("-o Test test.o")
        self.assertEqual(self.b.last_exec_command, "ld -o Test test.o")

    def test_exec_has_no_prefix(self) -> None:
        self.b.exec('echo "%s"', "Testing...")
        self.assertEqual(self.b.last_exec_command, 'echo "Testing..."')

    def test_integer_and_percent_conversions(self) -> None:
        self.b.exec("make -j%d", 4)
        self.assertEqual(self.b.last_exec_command, "make -j4")
        self.b.exec("echo 100%%")
        self.assertEqual(self.b.last_exec_command, "echo 100%")

    def test_keyword_arguments(self) -> None:
        self.b.cc("-o %(out)s %(src)s", out="app", src="app.c")
        self.assertEqual(self.b.last_exec_command, "gcc -o app app.c")

    def test_mixed_arguments_rejected(self) -> None:
        with self.assertRaises(TypeError):
            self.b.cc("-o %s %(src)s", "app", src="app.c")

    def test_format_errors_leave_last_command(self) -> None:
        self.b.cc("-c a.c")
        with self.assertRaises(CommandFormatError):
            self.b.cc("-c %s")
        with self.assertRaises(CommandFormatError):
            self.b.cc("-c", "extra")
        self.assertEqual(self.b.last_exec_command, "gcc -c a.c")

    def test_keyword_format_errors_leave_last_command(self) -> None:
        self.b.cc("-c a.c")
        with self.assertRaises(CommandFormatError):
            self.b.cc("-c %s", src="a.c")
        with self.assertRaises(CommandFormatError):
            self.b.cc("-c a.c", extra="x")
        with self.assertRaises(CommandFormatError):
            self.b.cc("-c %(src)s", src="a.c", extra="x")
        with self.assertRaises(CommandFormatError):
            self.b.cc("-c %%(src)s", src="a.c")
        self.assertEqual(self.b.last_exec_command, "gcc -c a.c")

    def test_keyword_format_with_literal_percent(self) -> None:
        self.b.exec("printf '%%d' %(count)d", count=3)
        self.assertEqual(self.b.last_exec_command, "printf '%d' 3")

    def test_tool_changes_apply_to_next_command(self) -> None:
        self.b.cc("-c a.c")
        self.b.cc_command = "clang"
        self.assertEqual(self.b.last_exec_command, "gcc -c a.c")
        self.b.cc("-c a.c")
        self.assertEqual(self.b.last_exec_command, "clang -c a.c")

    def test_executable_file_name(self) -> None:
        self.assertEqual(self.b.executable_file_name("Test"), "Test")
        windows = _quiet_builder(os_family=OSFamily.WINDOWS)
        self.assertEqual(windows.executable_file_name("Test"), "Test.exe")
        self.b.cxx("-o %s %s", self.b.executable_file_name("Test"), "Test.cc")
        self.assertEqual(self.b.last_exec_command, "g++ -o Test Test.cc")


class FormatHelpersTests(unittest.TestCase):
    def test_assemble_command(self) -> None:
        self.assertEqual(assemble_command("", "echo hi"), "echo hi")
        self.assertEqual(assemble_command("gcc", "-c a.c"), "gcc -c a.c")

    def test_format_parameters_without_arguments(self) -> None:
        self.assertEqual(format_parameters("-c a.c", (), {}), "-c a.c")

    def test_out_of_memory(self) -> None:
        class Exhausting:
            def __str__(self) -> str:
                raise MemoryError

        with self.assertRaises(OutOfMemoryError):
            format_parameters("%s", (Exhausting(),), {})


class FileCommandTests(unittest.TestCase):
    def test_posix_commands(self) -> None:
        b = _quiet_builder()
        b.move("a.o", "b.o")
        self.assertEqual(b.last_exec_command, 'mv "a.o" "b.o"')
        b.copy("a.o", "dir with space/b.o")
        self.assertEqual(b.last_exec_command, 'cp "a.o" "dir with space/b.o"')
        b.remove(Path("b.o"))
        self.assertEqual(b.last_exec_command, 'rm -f "b.o"')

    def test_windows_commands(self) -> None:
        b = _quiet_builder(os_family=OSFamily.WINDOWS)
        b.move("a.o", "b.o")
        self.assertEqual(b.last_exec_command, 'move "a.o" "b.o"')
        b.copy("a.o", "b.o")
        self.assertEqual(b.last_exec_command, 'copy "a.o" "b.o"')
        b.remove("b.o")
        self.assertEqual(b.last_exec_command, 'del "b.o"')


class InvocationTests(unittest.TestCase):
    def test_dry_run_echoes_and_never_spawns(self) -> None:
        b = Builder(os_family=OSFamily.LINUX)
        with patch("buildscript.src.command_runner.subprocess.run") as run, patch(
            "sys.stdout", new=StringIO()
        ) as out:
            result = b.cc("-c %s", "foo.c")
        run.assert_not_called()
        self.assertIsNone(result)
        self.assertEqual(out.getvalue(), "[DRYRUN] gcc -c foo.c\n")
        self.assertEqual(b.last_exec_command, "gcc -c foo.c")

    def test_live_run_echoes_invoke_marker(self) -> None:
        runner = RecordingCommandRunner()
        b = Builder(dry_run=False, os_family=OSFamily.LINUX, runner=runner)
        with patch("sys.stdout", new=StringIO()) as out:
            b.ar("cr %s %s", "libx.a", "x.o")
        self.assertEqual(out.getvalue(), "[INVOKE] ar cr libx.a x.o\n")
        self.assertEqual(runner.commands, ["ar cr libx.a x.o"])

    def test_echo_disabled(self) -> None:
        b = _quiet_builder()
        with patch("sys.stdout", new=StringIO()) as out:
            b.ld("-o app app.o")
        self.assertEqual(out.getvalue(), "")

    def test_toggling_dry_run_executes_next_command(self) -> None:
        runner = RecordingCommandRunner()
        b = _quiet_builder(runner=runner)
        b.exec("touch a")
        self.assertEqual(runner.commands, [])
        b.dry_run = False
        b.exec("touch b")
        self.assertEqual(runner.commands, ["touch b"])

    def test_nonzero_exit_is_returned_not_raised(self) -> None:
        runner = RecordingCommandRunner(returncode=2)
        b = _quiet_builder(dry_run=False, runner=runner)
        result = b.cc("-c missing.c")
        self.assertIsNotNone(result)
        self.assertEqual(result.returncode, 2)

    def test_nonzero_exit_is_logged_at_debug(self) -> None:
        runner = RecordingCommandRunner(returncode=2)
        b = _quiet_builder(dry_run=False, runner=runner, console=Console(level="debug"))
        with patch("sys.stdout", new=StringIO()) as out:
            b.cc("-c missing.c")
        self.assertEqual(out.getvalue(), "[DEBUG] exit status 2: gcc -c missing.c\n")

    def test_shell_failure_still_records_command(self) -> None:
        runner = RecordingCommandRunner(returncode=127)
        b = _quiet_builder(dry_run=False, runner=runner)
        with self.assertRaises(ShellInvocationError):
            b.exec("no-such-tool --version")
        self.assertEqual(b.last_exec_command, "no-such-tool --version")


@unittest.skipUnless(os.name == "posix", "requires a POSIX shell")
class LiveShellTests(unittest.TestCase):
    def setUp(self) -> None:
        self.temp_dir = tempfile.TemporaryDirectory()
        self.root = Path(self.temp_dir.name)
        self.b = Builder(dry_run=False, print_command_to_stdout=False)

    def tearDown(self) -> None:
        self.temp_dir.cleanup()

    def test_exec_side_effect(self) -> None:
        target = self.root / "made by shell.txt"
        self.b.exec('echo built > "%s"', target)
        self.assertTrue(self.b.file_exists(target))
        self.assertEqual(target.read_text().strip(), "built")

    def test_exit_status_is_not_a_failure(self) -> None:
        result = self.b.exec("exit 3")
        self.assertEqual(result.returncode, 3)

    def test_missing_command_is_shell_invocation_error(self) -> None:
        with self.assertRaises(ShellInvocationError):
            self.b.exec("buildscript-no-such-command-%d", 42)

    def test_copy_move_remove(self) -> None:
        source = self.root / "obj file.o"
        source.write_bytes(b"\x7fELF")
        copied = self.root / "copied.o"
        moved = self.root / "moved.o"

        self.b.copy(source, copied)
        self.b.move(source, moved)
        self.assertFalse(self.b.file_exists(source))
        self.assertTrue(self.b.file_exists(copied))
        self.assertTrue(self.b.file_exists(moved))

        self.b.remove(copied)
        self.b.remove(moved)
        self.assertFalse(self.b.file_exists(copied))
        self.assertFalse(self.b.file_exists(moved))

    def test_remove_missing_file_is_quiet(self) -> None:
        result = self.b.remove(self.root / "never-existed.o")
        self.assertEqual(result.returncode, 0)

    @unittest.skipUnless(shutil.which("gcc"), "requires gcc")
    def test_compiles_object(self) -> None:
        source = self.root / "unit.c"
        source.write_text("int unit(void) { return 1; }\n")
        obj = self.root / "unit.o"
        self.b.c_language_standard = "c11"
        self.b.cc('-o "%s" -c "%s"', obj, source)
        self.assertTrue(self.b.file_exists(obj))


if __name__ == "__main__":
    unittest.main()
