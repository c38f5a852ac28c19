"""Tests for the console module."""

import unittest
from datetime import datetime, timezone

from ibexa_system_info.console import (
    console,
    error_console,
    print_composer_info,
    print_error,
    print_kernel_info,
    print_summary_table,
    print_system_info,
    print_warning,
)
from ibexa_system_info.models import ComposerPackage, ComposerSystemInfo, IbexaSystemInfo, KernelSystemInfo
from ibexa_system_info.stability import Stability


class TestMessages(unittest.TestCase):
    """Tests for warning and error output."""

    def test_warning_goes_to_stderr_console(self):
        with error_console.capture() as capture:
            print_warning("composer.lock not found", title="Composer")
        self.assertIn("Warning (Composer):", capture.get())
        self.assertIn("composer.lock not found", capture.get())

    def test_error_without_title(self):
        with error_console.capture() as capture:
            print_error("boom")
        self.assertIn("Error:", capture.get())


class TestSummaryTable(unittest.TestCase):
    """Tests for print_summary_table."""

    def test_empty_values_hidden(self):
        with console.capture() as capture:
            print_summary_table("Info", [("Shown", "yes"), ("Hidden", None), ("Blank", "")])
        output = capture.get()
        self.assertIn("Shown", output)
        self.assertNotIn("Hidden", output)
        self.assertNotIn("Blank", output)

    def test_nothing_printed_when_all_empty(self):
        with console.capture() as capture:
            print_summary_table("Info", [("Hidden", None)])
        self.assertEqual(capture.get(), "")


class TestSystemInfoRendering(unittest.TestCase):
    """Tests for the collector renderers."""

    def test_system_info(self):
        info = IbexaSystemInfo(
            name="Ibexa Experience",
            release="3.3.2",
            variant="experience",
            is_end_of_maintenance=True,
            end_of_maintenance_date=datetime(2023, 12, 30, 23, 59, 59, tzinfo=timezone.utc),
            end_of_life_date=datetime(2025, 12, 30, 23, 59, 59, tzinfo=timezone.utc),
            is_enterprise=True,
            stability=Stability.BETA,
            lowest_stability=Stability.BETA,
            composer_info={"minimumStability": None},
        )
        with console.capture() as capture:
            print_system_info(info)
        output = capture.get()

        self.assertIn("Ibexa Experience", output)
        self.assertIn("2023-12-30 (passed)", output)
        self.assertIn("2025-12-30", output)
        self.assertIn("beta", output)
        self.assertIn("stable (default)", output)

    def test_kernel_info(self):
        info = KernelSystemInfo(
            environment="dev",
            debug_mode=True,
            version="3.12.1",
            bundles={"AppBundle": "app.AppBundle"},
            project_dir="/srv/app",
            cache_dir="/srv/app/var/cache/dev",
            log_dir="/srv/app/var/log",
        )
        with console.capture() as capture:
            print_kernel_info(info)
        output = capture.get()

        self.assertIn("Kernel", output)
        self.assertIn("AppBundle", output)

    def test_composer_info(self):
        info = ComposerSystemInfo(
            packages={"ibexa/core": ComposerPackage(name="ibexa/core", branch="v4.6.0", stability="stable")},
            minimum_stability="dev",
        )
        with console.capture() as capture:
            print_composer_info(info)
        output = capture.get()

        self.assertIn("ibexa/core", output)
        self.assertIn("Minimum stability: dev", output)


if __name__ == "__main__":
    unittest.main()
