"""Tests for the command-line interface.

WHY: The CLI is what build scripts call. Its defaults (output name,
coverage, failure policy) and exit codes are part of the contract with
those scripts.

HOW: Call main() with an explicit argv inside a temporary working
directory and inspect the produced header and the return code.

RULES:
- Every test chdirs into tmp_path so out.h never lands in the repo
"""

import logging
import sys

import pytest

from tmx2c.cli import build_parser, main

from conftest import MALFORMED_TMX, minimal_map


@pytest.fixture
def workdir(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    return tmp_path


class TestParser:
    def test_defaults(self):
        args = build_parser().parse_args([])
        assert args.inputs == []
        assert args.output == "out.h"
        assert args.format == "c_header"
        assert args.all_attributes is False
        assert args.lenient is False
        assert args.fail_fast is False

    def test_inputs_keep_order(self):
        args = build_parser().parse_args(["b.tmx", "a.tmx"])
        assert args.inputs == ["b.tmx", "a.tmx"]

    def test_verbose_and_quiet_exclusive(self):
        with pytest.raises(SystemExit) as excinfo:
            build_parser().parse_args(["-v", "-q"])
        assert excinfo.value.code == 2


class TestMain:
    def test_end_to_end_two_maps(self, workdir, write_tmx):
        write_tmx("a.tmx", minimal_map("1.0", "orthogonal"))
        write_tmx("b.tmx", minimal_map("1.2", "isometric"))

        code = main(["a.tmx", "b.tmx"])

        assert code == 0
        assert (workdir / "out.h").read_text(encoding="utf-8") == (
            "#ifdef a_tmx_MAP\n"
            "#define a_tmx_Version 1.0\n"
            "#define a_tmx_Orientation orthogonal\n"
            "#endif\n"
            "#ifdef b_tmx_MAP\n"
            "#define b_tmx_Version 1.2\n"
            "#define b_tmx_Orientation isometric\n"
            "#endif\n"
        )

    def test_no_inputs_creates_empty_output(self, workdir):
        assert main([]) == 0
        assert (workdir / "out.h").read_bytes() == b""

    def test_custom_output_path(self, workdir, write_tmx):
        write_tmx("a.tmx", minimal_map())
        assert main(["a.tmx", "-o", "maps.h"]) == 0
        assert (workdir / "maps.h").is_file()
        assert not (workdir / "out.h").exists()

    def test_skipped_input_gives_exit_code_1(self, workdir, write_tmx):
        write_tmx("good.tmx", minimal_map())
        write_tmx("good2.tmx", minimal_map())

        code = main(["good.tmx", "", "good2.tmx", "-q"])

        assert code == 1
        text = (workdir / "out.h").read_text(encoding="utf-8")
        assert text.count("#ifdef ") == 2
        assert text.index("good_tmx_MAP") < text.index("good2_tmx_MAP")

    def test_all_attributes(self, workdir, write_tmx, full_map_tmx):
        write_tmx("full.tmx", full_map_tmx)
        assert main(["--all-attributes", "full.tmx"]) == 0
        text = (workdir / "out.h").read_text(encoding="utf-8")
        assert "#define full_tmx_TileHeight 16\n" in text
        assert "#define full_tmx_ObjectGroupCount 1\n" in text

    def test_lenient_flag(self, workdir, write_tmx):
        write_tmx("broken.tmx", MALFORMED_TMX)
        assert main(["--lenient", "-q", "broken.tmx"]) == 0
        assert (workdir / "out.h").read_text(encoding="utf-8").startswith(
            "#ifdef broken_tmx_MAP\n"
        )

    def test_fail_fast_aborts(self, workdir, write_tmx, caplog):
        write_tmx("later.tmx", minimal_map())
        with caplog.at_level(logging.ERROR, logger="tmx2c"):
            code = main(["--fail-fast", "missing.tmx", "later.tmx"])
        assert code == 1
        assert (workdir / "out.h").read_bytes() == b""
        assert "Aborted" in caplog.text

    def test_unwritable_output(self, workdir, write_tmx):
        write_tmx("a.tmx", minimal_map())
        assert main(["a.tmx", "-o", str(workdir / "no-such-dir" / "out.h"), "-q"]) == 1

    def test_stdout_stays_clean(self, workdir, write_tmx, caplog):
        write_tmx("a.tmx", minimal_map())
        with caplog.at_level(logging.WARNING, logger="tmx2c"):
            main(["-v", "a.tmx", "missing.tmx"])
        assert "Skipping" in caplog.text
        streams = [h.stream for h in logging.getLogger("tmx2c").handlers]
        assert streams == [sys.stderr]
