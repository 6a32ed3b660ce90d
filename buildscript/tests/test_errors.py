import unittest

from buildscript.src import errors
from buildscript.src.errors import UNKNOWN_STATUS_MESSAGE, BuildError, Status, status_message


class StatusMessageTests(unittest.TestCase):
    def test_every_status_has_a_message(self):
        for status in Status:
            with self.subTest(status=status):
                self.assertNotEqual(status_message(status), UNKNOWN_STATUS_MESSAGE)

    def test_plain_integers(self):
        self.assertEqual(status_message(0), "OK")
        self.assertEqual(status_message(3), "unknown OS")
        self.assertEqual(status_message(999), UNKNOWN_STATUS_MESSAGE)
        self.assertEqual(status_message(-1), UNKNOWN_STATUS_MESSAGE)


class BuildErrorTests(unittest.TestCase):
    def test_subclasses_carry_distinct_statuses(self):
        classes = [
            errors.OutOfMemoryError,
            errors.UnknownOSError,
            errors.UnknownConsoleCodePageError,
            errors.ObjectRequiredError,
            errors.InvocationError,
            errors.ShellInvocationError,
            errors.StatFailedError,
            errors.DirectoryNameResolutionError,
            errors.ChangeDirectoryError,
            errors.CurrentWorkingDirectoryError,
            errors.MissingExecutablePathError,
        ]
        statuses = {cls.status for cls in classes}
        self.assertEqual(len(statuses), len(classes))
        self.assertNotIn(Status.OK, statuses)
        for cls in classes:
            self.assertTrue(issubclass(cls, BuildError))
            self.assertTrue(issubclass(cls, RuntimeError))

    def test_default_message(self):
        self.assertEqual(str(errors.StatFailedError()), "stat failed")
        self.assertEqual(str(errors.StatFailedError("unable to stat file: a.o")), "unable to stat file: a.o")

    def test_format_error_is_unknown_status(self):
        self.assertIs(errors.CommandFormatError.status, Status.UNKNOWN)


if __name__ == "__main__":
    unittest.main()
