from pathlib import Path
import sys

import pytest

sys.path.append(str(Path(__file__).resolve().parents[1]))

from letterstrands import cli


def test_word_file_option_is_repeatable():
    args = cli.parse_args(["-w", "a.txt", "--word-file", "b.txt"])
    assert args.word_files == ["a.txt", "b.txt"]
    assert cli.parse_args([]).word_files == []


def test_unknown_option_exits_with_error():
    with pytest.raises(SystemExit) as excinfo:
        cli.parse_args(["--bogus"])
    assert excinfo.value.code != 0


def test_load_word_files_continues_after_failure(tmp_path):
    good = tmp_path / "good.txt"
    good.write_text("the the", encoding="utf-8")
    model = cli.TrigramModel()
    failed = cli.load_word_files(model, [str(tmp_path / "missing.txt"), str(good)])
    assert failed == [str(tmp_path / "missing.txt")]
    assert model.count("THE") == 2


def test_main_loads_files_before_starting_gui(tmp_path):
    corpus = tmp_path / "corpus.txt"
    corpus.write_text("cat", encoding="utf-8")
    seen = []
    status = cli.main(["-w", str(corpus), "-w", str(corpus)], run_gui=seen.append)
    assert status == 0
    assert len(seen) == 1
    assert seen[0].count("CAT") == 2
