import io

import pytest

from cachebench import interactive


def test_read_run_options():
    opt = interactive.read_run_options(io.StringIO("2 4\n1 2 1 3\n"))
    assert opt.cache_size == 2
    assert opt.elem_num == 4
    assert opt.key_seq == [1, 2, 1, 3]


def test_extra_keys_ignored():
    opt = interactive.read_run_options(io.StringIO("1 2 5 6 7"))
    assert opt.key_seq == [5, 6]


@pytest.mark.parametrize("text", ["", "abc", "2", "2 5 1 2", "2 2 1 x"])
def test_bad_format(text):
    with pytest.raises(ValueError, match="Invalid input format"):
        interactive.read_run_options(io.StringIO(text))


def test_negative_numbers():
    with pytest.raises(ValueError, match="must be positive"):
        interactive.read_run_options(io.StringIO("-1 2 1 1"))


def test_main_prints_hits(capsys):
    assert interactive.main(io.StringIO("2 4 1 2 1 3")) == 0
    out = capsys.readouterr().out.splitlines()
    assert out == ["Hits statistics: ", "- LFU    : 1", "- Perfect: 1"]


def test_main_bad_input(capsys):
    assert interactive.main(io.StringIO("nope")) == 1
    assert "Input format:" in capsys.readouterr().out
