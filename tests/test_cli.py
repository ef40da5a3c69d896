"""Tests for the command-line interface."""

import pytest

from imgpress import __version__
from imgpress.cli.compression_cli import main as compression_main
from imgpress.cli.main import main


@pytest.fixture
def jpeg_file(tmp_path, jpeg_bytes):
    path = tmp_path / "photo.jpg"
    path.write_bytes(jpeg_bytes)
    return path


def test_compress_command(tmp_path, jpeg_file, capsys):
    output_dir = tmp_path / "out"
    code = main(
        ["compress", str(jpeg_file), "-q", "50", "-p", "50", "-n", "small", "-o", str(output_dir)]
    )

    assert code == 0
    assert (output_dir / "small.jpeg").exists()
    output = capsys.readouterr().out
    assert "Size: 500x250" in output


def test_compress_fixed_width(tmp_path, jpeg_file):
    code = compression_main(
        [str(jpeg_file), "--width", "100", "--resample", "lanczos", "-o", str(tmp_path)]
    )

    assert code == 0
    assert (tmp_path / "download.jpeg").exists()


def test_scale_options_are_exclusive(jpeg_file):
    with pytest.raises(SystemExit):
        main(["compress", str(jpeg_file), "--width", "10", "--height", "10"])


def test_svg_note(tmp_path, svg_bytes, capsys):
    path = tmp_path / "logo.svg"
    path.write_bytes(svg_bytes)

    assert main(["compress", str(path), "--percent", "10", "-o", str(tmp_path / "out")]) == 0
    assert "do not apply to vector images" in capsys.readouterr().out


def test_unsupported_input(tmp_path, bmp_bytes, capsys):
    path = tmp_path / "image.bmp"
    path.write_bytes(bmp_bytes)

    assert main(["compress", str(path), "-o", str(tmp_path)]) == 1
    assert "image/bmp" in capsys.readouterr().err


def test_missing_input(tmp_path, capsys):
    assert main(["compress", str(tmp_path / "missing.png")]) == 1
    assert "Error:" in capsys.readouterr().err


def test_verbose(tmp_path, jpeg_file, capsys):
    main(["compress", str(jpeg_file), "-v", "-o", str(tmp_path)])
    output = capsys.readouterr().out

    assert f"Processing: {jpeg_file}" in output
    assert "Decoded: image/jpeg 1000x500" in output


def test_version(capsys):
    assert main(["version"]) == 0
    assert __version__ in capsys.readouterr().out


def test_no_command(capsys):
    assert main([]) == 0
    assert "usage" in capsys.readouterr().out
