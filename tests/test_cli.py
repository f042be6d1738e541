import json
import sys

import pytest

from favicon_generator import cli


def run(monkeypatch, *argv):
    monkeypatch.setattr(sys, "argv", ["favicon-generator", *argv])
    cli.main()


def test_writes_outputs_and_prints_html(tmp_path, monkeypatch, capsys, make_png):
    source = tmp_path / "logo.png"
    source.write_bytes(make_png(128, 128))
    out = tmp_path / "out"

    run(
        monkeypatch,
        str(source),
        "--output-dir", str(out),
        "--platforms", "favicons,yandex",
        "--path", "/icons/",
        "--background", "#222222",
    )

    assert (out / "favicon-16x16.png").exists()
    assert (out / "favicon.ico").exists()
    manifest = json.loads((out / "yandex-browser-manifest.json").read_text(encoding="utf-8"))
    assert manifest["layout"]["color"] == "#222222"
    printed = capsys.readouterr().out
    assert '<link rel="shortcut icon" href="/icons/favicon.ico">' in printed
    assert printed.startswith("<!-- === FAVICONS & PWA ICONS === -->")


def test_config_file_is_merged(tmp_path, monkeypatch, make_png):
    source = tmp_path / "logo.png"
    source.write_bytes(make_png(64, 64))
    config = tmp_path / "favicons.json"
    config.write_text(json.dumps({"appName": "From file", "icons": {"coast": {"offset": 5}}}))
    out = tmp_path / "out"

    run(
        monkeypatch,
        str(source),
        "--config", str(config),
        "--output-dir", str(out),
        "--platforms", "coast",
        "--html-file", "head.html",
    )

    assert (out / "coast-228x228.png").exists()
    assert "coast-228x228.png" in (out / "head.html").read_text(encoding="utf-8")


def test_unknown_platform_flag(tmp_path, monkeypatch):
    with pytest.raises(SystemExit):
        run(monkeypatch, str(tmp_path / "x.png"), "--platforms", "palm")


def test_library_errors_exit(tmp_path, monkeypatch):
    source = tmp_path / "bad.png"
    source.write_bytes(b"not an image")
    with pytest.raises(SystemExit) as excinfo:
        run(monkeypatch, str(source), "--platforms", "favicons", "--output-dir", str(tmp_path))
    assert "Invalid image buffer" in str(excinfo.value)
