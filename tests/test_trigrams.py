import io
from pathlib import Path
import sys

import pytest

sys.path.append(str(Path(__file__).resolve().parents[1]))

from letterstrands.errors import SourceOpenFailure
from letterstrands.trigrams import TrigramModel


def build_model(*texts):
    model = TrigramModel()
    for text in texts:
        model.ingest(io.BytesIO(text.encode("utf-8")))
    return model


def test_spaces_break_trigrams():
    model = build_model("THE THE THE")
    assert dict(model.counts) == {"THE": 3}
    assert model.total == 3
    assert model.max == 3


def test_total_matches_all_letter_windows():
    model = build_model("abcd ef")
    assert dict(model.counts) == {"ABC": 1, "BCD": 1}
    assert model.total == sum(model.counts.values()) == 2
    assert model.max == 1


def test_window_slides_across_non_letters_without_reset():
    model = build_model("ab1cde")
    assert dict(model.counts) == {"CDE": 1}


def test_ingest_returns_number_of_trigrams_added():
    model = TrigramModel()
    assert model.ingest(io.BytesIO(b"hello")) == 3


def test_ingesting_twice_doubles_counts():
    once = build_model("the cat sat on the mat")
    twice = build_model("the cat sat on the mat", "the cat sat on the mat")
    assert {k: v * 2 for k, v in once.counts.items()} == dict(twice.counts)
    assert twice.total == once.total * 2
    assert twice.max == once.max * 2


def test_clear_resets_everything():
    model = build_model("the cat")
    model.clear()
    assert model.frequency_of("THE") == 0
    assert model.total == 0
    assert model.max == 0
    assert len(model) == 0


def test_frequency_of_accepts_letter_sequences():
    model = build_model("cat bat")
    assert model.frequency_of(["C", "A", "T"]) == pytest.approx(0.5)
    assert model.frequency_of("CAT") == pytest.approx(0.5)
    assert model.frequency_of("DOG") == 0
    assert "BAT" in model
    assert model.count(("B", "A", "T")) == 1


def test_empty_model_has_zero_frequencies():
    model = TrigramModel()
    assert model.frequency_of("ABC") == 0
    assert model.max_frequency == 0
    assert model.threshold(0.0) == 0


def test_threshold_scales_with_slider_value():
    model = build_model("aaaa bcd")
    assert model.max_frequency == pytest.approx(2 / 3)
    assert model.threshold(1.0) == 0
    assert model.threshold(0.0) == pytest.approx(2 / 3)
    assert model.threshold(0.5) == pytest.approx(1 / 3)
    assert model.threshold(-3) == model.threshold(0.0)
    assert model.threshold(7) == model.threshold(1.0)


def test_truncated_source_keeps_prefix_counts():
    model = TrigramModel()
    model.ingest(io.BytesIO(b"abcd\xe4"))
    assert dict(model.counts) == {"ABC": 1, "BCD": 1}
    assert model.total == 2


def test_ingest_path_reads_file(tmp_path):
    corpus = tmp_path / "corpus.txt"
    corpus.write_text("Über über", encoding="utf-8")
    model = TrigramModel()
    assert model.ingest_path(corpus) == 4
    assert model.count("ÜBE") == 2
    assert model.count("BER") == 2


def test_ingest_path_failure_leaves_model_unchanged(tmp_path):
    model = build_model("the cat")
    before = dict(model.counts)
    with pytest.raises(SourceOpenFailure) as excinfo:
        model.ingest_path(tmp_path / "missing.txt")
    assert excinfo.value.path == tmp_path / "missing.txt"
    assert dict(model.counts) == before
    assert model.total == 2


def test_most_common_orders_by_count():
    model = build_model("the the cat")
    assert model.most_common(1) == [("THE", 2)]
