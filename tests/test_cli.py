"""
CLI tests — argument handling, console report and exit codes.
Copy decisions are irreversible, so the report must match what was copied.
"""
import os
import sys
from unittest import mock

import pytest

from conftest import FakeRenderer, bits_image
from pdfdedup.cli import CLIApplication
from pdfdedup.core.models import ClusteringMode, CopyError, MatchMode
from pdfdedup.services.file_service import FileService


class TestReport:
    """End-to-end runs through the CLI on real PDFs."""

    def test_prints_groups_and_copied_files(self, sample_pdfs, temp_dir, capsys):
        output = temp_dir / "out"
        with mock.patch.object(sys, 'argv', [
            'pdfdedup', '--input', str(sample_pdfs), '--output', str(output), '--dpi', '72'
        ]):
            CLIApplication().run()

        out = capsys.readouterr().out
        assert "Region-wise duplicate groups (all regions must match):" in out
        assert "Group 1 (2): [a.pdf, b.pdf]" in out
        assert "Group 2" not in out
        assert "Copied files:\n  a.pdf\n  c.pdf" in out
        assert sorted(os.listdir(output)) == ["a.pdf", "c.pdf"]

    def test_dry_run_lists_without_copying(self, sample_pdfs, temp_dir, capsys):
        output = temp_dir / "out"
        CLIApplication().run(['-i', str(sample_pdfs), '-o', str(output), '--dpi', '72', '--dry-run'])

        out = capsys.readouterr().out
        assert "would be copied" in out
        assert not output.exists()

    def test_quiet_prints_nothing(self, sample_pdfs, temp_dir, capsys):
        CLIApplication().run(['-i', str(sample_pdfs), '-o', str(temp_dir / "out"), '--dpi', '72', '-q'])
        assert capsys.readouterr().out == ""

    def test_no_duplicates_message(self, pdf_folder, temp_dir, capsys):
        folder = pdf_folder(["a.pdf", "b.pdf"])
        renderer = FakeRenderer({"a.pdf": bits_image(0xFF), "b.pdf": bits_image(0xFF00)})

        CLIApplication(renderer=renderer).run(['-i', str(folder), '-o', str(temp_dir / "out"), '--mode', 'page', '-t', '0'])

        assert "No duplicate groups found." in capsys.readouterr().out

    def test_skipped_files_reported_on_stderr(self, sample_pdfs, temp_dir, capsys):
        (sample_pdfs / "broken.pdf").write_bytes(b"garbage")
        CLIApplication().run(['-i', str(sample_pdfs), '-o', str(temp_dir / "out"), '--dpi', '72'])

        captured = capsys.readouterr()
        assert "broken.pdf" in captured.err
        assert "broken.pdf" not in captured.out


class TestErrors:
    """Fatal vs non-fatal failures."""

    def test_copy_failure_exits_with_error(self, sample_pdfs, temp_dir, capsys):
        with mock.patch.object(FileService, "copy_file", side_effect=CopyError("disk full")):
            with pytest.raises(SystemExit) as exc_info:
                CLIApplication().run(['-i', str(sample_pdfs), '-o', str(temp_dir / "out"), '--dpi', '72'])

        assert exc_info.value.code == 1
        assert "Copy failed: disk full" in capsys.readouterr().err

    def test_missing_input_is_not_fatal(self, temp_dir, capsys):
        CLIApplication().run(['-i', str(temp_dir / "missing"), '-o', str(temp_dir / "out")])

        captured = capsys.readouterr()
        assert "Directory not found" in captured.err
        assert "No duplicate groups found." in captured.out

    @pytest.mark.parametrize("argv", [
        ['-t', '-1'],
        ['-t', '65'],
        ['--dpi', '0'],
        ['--page', '-1'],
        ['--workers', '0'],
    ])
    def test_invalid_numbers_exit(self, temp_dir, argv):
        with pytest.raises(SystemExit) as exc_info:
            CLIApplication().run(['-i', str(temp_dir)] + argv)
        assert exc_info.value.code == 1

    def test_output_equal_to_input_rejected(self, temp_dir):
        with pytest.raises(SystemExit):
            CLIApplication().run(['-i', str(temp_dir), '-o', str(temp_dir)])


class TestFind:
    """--find prints the whole-page group of one file."""

    @pytest.fixture
    def app_and_folder(self, pdf_folder):
        folder = pdf_folder(["x.pdf", "y.pdf", "z.pdf"])
        renderer = FakeRenderer({
            "x.pdf": bits_image(0xF0F0),
            "y.pdf": bits_image(0xF0F1),
            "z.pdf": bits_image(0x0F0F),
        })
        return CLIApplication(renderer=renderer), str(folder)

    def test_found(self, app_and_folder, capsys):
        app, folder = app_and_folder
        app.run(['-i', folder, '--find', 'y.pdf', '-t', '1'])
        out = capsys.readouterr().out
        assert "Duplicates of y.pdf (2):\n  x.pdf\n  y.pdf" in out

    def test_no_duplicates(self, app_and_folder, capsys):
        app, folder = app_and_folder
        app.run(['-i', folder, '--find', 'z.pdf', '-t', '1'])
        assert "No duplicates found for z.pdf." in capsys.readouterr().out

    def test_not_found(self, app_and_folder, capsys):
        app, folder = app_and_folder
        app.run(['-i', folder, '--find', 'nope.pdf'])
        assert "File not found" in capsys.readouterr().err

    def test_renders_requested_page(self, pdf_folder, capsys):
        folder = pdf_folder(["a.pdf", "b.pdf"])
        renderer = FakeRenderer({"a.pdf": bits_image(0xF0), "b.pdf": bits_image(0xF0)})

        CLIApplication(renderer=renderer).run(['-i', str(folder), '--page', '2', '--find', 'a.pdf', '-t', '0'])

        assert renderer.calls == [("a.pdf", 2), ("b.pdf", 2)]
        assert "Duplicates of a.pdf (2):" in capsys.readouterr().out

    def test_forwards_dpi_and_workers(self, pdf_folder):
        folder = pdf_folder(["a.pdf"])
        with mock.patch("pdfdedup.cli.DeduplicationCommand") as command_cls:
            CLIApplication().run(['-i', str(folder), '--dpi', '300', '-w', '4', '--find', 'a.pdf'])

        lookup_file = command_cls.return_value.lookup_file
        assert lookup_file.call_args.kwargs == {"dpi": 300, "page_index": 0, "workers": 4}


class TestArgumentParsing:
    def test_defaults(self, temp_dir):
        app = CLIApplication()
        params = app.create_params(app.parse_args(['-i', str(temp_dir)]))

        assert params.match_mode == MatchMode.REGION
        assert params.clustering == ClusteringMode.GREEDY
        assert params.threshold == 5
        assert params.dpi == 150
        assert params.output_dir == str(temp_dir.resolve().parent / "distinct_files")

    def test_aliases_map_to_enums(self, temp_dir):
        app = CLIApplication()
        params = app.create_params(app.parse_args(
            ['-i', str(temp_dir), '--mode', 'page', '--clustering', 'transitive', '-w', '3']
        ))
        assert params.match_mode == MatchMode.PAGE
        assert params.clustering == ClusteringMode.TRANSITIVE
        assert params.workers == 3
