import io

from xvkit.wc import Counts, main, wc


def test_wc_counts():
    data = b"hello world\nfoo\n"
    c = wc(io.BytesIO(data))
    assert c == Counts(data.count(b"\n"), 3, len(data))


def test_wc_empty():
    assert wc(io.BytesIO(b"")) == Counts(0, 0, 0)


def test_wc_nul_separates_words():
    assert wc(io.BytesIO(b"a\0b")).words == 2


def test_wc_words_across_chunks():
    data = b"x" * 1000 + b" " + b"y" * 1000
    c = wc(io.BytesIO(data))
    assert c.words == len(data.split())
    assert c.chars == len(data)
    assert c.lines == 0


def test_main_file(tmp_path, capsys):
    f = tmp_path / "t.txt"
    data = b"one two\nthree\n"
    f.write_bytes(data)
    assert main([str(f)]) == 0
    expected = f"{data.count(b'\n')} {len(data.split())} {len(data)} {f}\n"
    assert capsys.readouterr().out == expected


def test_main_missing(tmp_path, capsys):
    missing = tmp_path / "gone"
    assert main([str(missing)]) == 1
    assert capsys.readouterr().out == f"wc: cannot open {missing}\n"