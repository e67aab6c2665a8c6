import csv
import io
from pathlib import Path
import sys

import pytest

sys.path.append(str(Path(__file__).resolve().parents[1]))

from letterstrands.errors import SourceOpenFailure
from letterstrands.files import FileService
from letterstrands.trigrams import TrigramModel


def test_open_source_closes_handle(tmp_path):
    corpus = tmp_path / "corpus.txt"
    corpus.write_bytes(b"abc")
    with FileService.open_source(corpus) as source:
        assert source.read() == b"abc"
    assert source.closed


def test_open_source_reports_missing_file(tmp_path):
    missing = tmp_path / "nope.txt"
    with pytest.raises(SourceOpenFailure) as excinfo:
        with FileService.open_source(missing):
            pass
    assert excinfo.value.path == missing
    assert str(missing) in str(excinfo.value)


def test_write_frequency_csv(tmp_path):
    model = TrigramModel()
    model.ingest(io.BytesIO(b"the the cat"))
    out = tmp_path / "trigrams.csv"
    assert FileService().write_frequency_csv(out, model) == 2
    with open(out, encoding="utf-8-sig", newline="") as f:
        rows = list(csv.reader(f))
    assert rows[0] == ["trigram", "count", "frequency"]
    assert rows[1] == ["THE", "2", "0.666667"]
    assert rows[2] == ["CAT", "1", "0.333333"]
