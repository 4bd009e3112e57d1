import pytest

from meshsimplify.cli import Options, main, parse_args
from meshsimplify.geometry import Color
from meshsimplify.image import Image


def _write_image(tmp_path):
    image = Image(8, 8)
    for y in range(8):
        for x in range(8):
            image.set_pixel(x, y, Color(x * 30, y * 30, 100))
    path = tmp_path / "picture.ppm"
    image.save(path)
    return path


def test_parse_defaults():
    assert parse_args([]) == Options(
        image="sunflowers.ppm",
        rows=10,
        cols=10,
        target=150,
        which="shortest",
        method="linear",
        preserve_area=False,
        debug=False,
    )


def test_parse_dimensions_are_cols_then_rows():
    options = parse_args(["-dimensions", "5", "7"])
    assert (options.cols, options.rows) == (5, 7)


def test_parse_flags():
    options = parse_args(
        ["-random", "-priority_queue", "-preserve_area", "-debug", "-image", "x.ppm", "-target", "40"]
    )
    assert options.which == "random"
    assert options.method == "priority_queue"
    assert options.preserve_area is True
    assert options.debug is True
    assert options.image == "x.ppm"
    assert options.target == 40


def test_parse_last_choice_wins():
    options = parse_args(["-color", "-shortest", "-priority_queue", "-linear"])
    assert (options.which, options.method) == ("shortest", "linear")


def test_parse_non_numeric_target_is_zero():
    assert parse_args(["-target", "abc"]).target == 0


def test_parse_unknown_argument():
    with pytest.raises(ValueError, match="unknown argument -bogus"):
        parse_args(["-bogus"])


@pytest.mark.parametrize("argv", [["-image"], ["-target"], ["-dimensions", "4"]])
def test_parse_missing_value(argv):
    with pytest.raises(ValueError):
        parse_args(argv)


def test_main_unknown_argument(capsys):
    assert main(["-bogus"]) == 1
    assert "unknown argument -bogus" in capsys.readouterr().err


def test_main_missing_image(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    assert main(["-image", "absent.ppm"]) == 1


def test_main_writes_pages(tmp_path, monkeypatch, capsys):
    path = _write_image(tmp_path)
    monkeypatch.chdir(tmp_path)
    stale = tmp_path / "mesh_collapse_05.html"
    stale.write_text("old")
    assert main(["-image", str(path), "-dimensions", "4", "4", "-target", "20"]) == 0
    out = capsys.readouterr().out
    assert "ORIGINAL:" in out
    assert "AFTER SIMPLIFY:" in out
    assert "AFTER COLLAPSE" not in out
    assert not stale.exists()
    original = (tmp_path / "mesh_original.html").read_text()
    assert 'next: <a href="mesh_final.html">' in original
    final = (tmp_path / "mesh_final.html").read_text()
    assert 'prev: <a href="mesh_original.html">' in final


def test_main_simplify_reaches_target(tmp_path, monkeypatch, capsys):
    path = _write_image(tmp_path)
    monkeypatch.chdir(tmp_path)
    assert main(["-image", str(path), "-dimensions", "4", "4", "-target", "20"]) == 0
    last = capsys.readouterr().out.strip().splitlines()[-1]
    triangles = int(last.split("edges,")[1].split("triangles")[0])
    assert triangles <= 20


def test_main_debug_writes_collapse_pages(tmp_path, monkeypatch, capsys):
    path = _write_image(tmp_path)
    monkeypatch.chdir(tmp_path)
    assert main(["-image", str(path), "-dimensions", "6", "6", "-target", "60", "-debug"]) == 0
    out = capsys.readouterr().out
    assert out.count("AFTER COLLAPSE") == 10
    for i in range(1, 11):
        assert (tmp_path / f"mesh_collapse_{i:02d}.html").exists()
    last_collapse = (tmp_path / "mesh_collapse_10.html").read_text()
    assert 'next: <a href="mesh_final.html">' in last_collapse
    final = (tmp_path / "mesh_final.html").read_text()
    assert 'prev: <a href="mesh_collapse_10.html">' in final