"""
Tests for the command line entry point.
"""

import json

import pytest

import main
from permalinker.config import ConfigManager


@pytest.fixture
def cli_config(tmp_path):
    path = tmp_path / "config.yaml"
    path.write_text(
        "permalink:\n"
        "  titleField: title\n"
        "  parentField: parent\n"
        "  urlPrefix: /\n"
        "database:\n"
        f"  filename: {tmp_path / 'pages.db'}\n"
    )
    return ConfigManager(str(path))


@pytest.fixture
def pages_file(tmp_path):
    path = tmp_path / "pages.yaml"
    path.write_text(
        "records:\n"
        "  - {id: 1, title: Home}\n"
        "  - {id: 2, title: About Us, parent: 1}\n"
        "  - {id: 3, title: '', parent: 2}\n"
        "  - {id: 4, title: Team, parent: 3}\n"
    )
    return path


def run(argv, cfg):
    return main.run_command(main.parse_arguments(argv), cfg)


def test_init(cli_config, capsys):
    assert run(["init"], cli_config) == 0
    assert "Record store ready" in capsys.readouterr().out


def test_import_and_generate(cli_config, pages_file, capsys):
    assert run(["import", str(pages_file)], cli_config) == 0
    assert "Imported 4 records" in capsys.readouterr().out

    assert run(["generate", "4"], cli_config) == 0
    assert capsys.readouterr().out.strip() == "/home/about-us/team"

    assert run(["generate", "4", "--prefix", ""], cli_config) == 0
    assert capsys.readouterr().out.strip() == "home/about-us/team"


def test_generate_unknown_record(cli_config, capsys):
    assert run(["generate", "404"], cli_config) == 1
    assert "Record not found" in capsys.readouterr().out


def test_import_missing_file(cli_config, tmp_path, capsys):
    assert run(["import", str(tmp_path / "nope.yaml")], cli_config) == 1
    assert "File not found" in capsys.readouterr().out


def test_import_record_without_id(cli_config, tmp_path, capsys):
    records = tmp_path / "no_id.yaml"
    records.write_text("- {title: Draft}\n")

    assert run(["import", str(records)], cli_config) == 1
    assert "Invalid records file" in capsys.readouterr().out


def test_import_malformed_yaml(cli_config, tmp_path, capsys):
    records = tmp_path / "broken.yaml"
    records.write_text("- {id: 1, title: [unclosed\n")

    assert run(["import", str(records)], cli_config) == 1
    assert "Invalid records file" in capsys.readouterr().out


def test_generate_all_writes_permalinks(cli_config, pages_file, capsys):
    run(["import", str(pages_file)], cli_config)
    capsys.readouterr()

    assert run(["generate-all", "--write"], cli_config) == 0
    lines = capsys.readouterr().out.strip().splitlines()
    assert "1\t/home" in lines
    assert "3\t/home/about-us" in lines

    with main.RecordStore(cli_config.database_filename) as store:
        assert store.get_record(4).get("permalink") == "/home/about-us/team"


def test_generate_all_reports_cycles(cli_config, tmp_path, capsys):
    cyclic = tmp_path / "cyclic.yaml"
    cyclic.write_text(
        "- {id: a, title: A, parent: b}\n"
        "- {id: b, title: B, parent: a}\n"
        "- {id: c, title: C}\n"
    )
    run(["import", str(cyclic)], cli_config)
    capsys.readouterr()

    assert run(["generate-all"], cli_config) == 1
    out = capsys.readouterr().out
    assert "c\t/c" in out
    assert "a\tERROR: Cycle detected" in out


def test_generate_reports_cycle(cli_config, tmp_path, capsys):
    cyclic = tmp_path / "cyclic.yaml"
    cyclic.write_text("- {id: x, title: X, parent: x}\n")
    run(["import", str(cyclic)], cli_config)
    capsys.readouterr()

    assert run(["generate", "x"], cli_config) == 1
    assert "Cycle detected" in capsys.readouterr().out


def test_describe(cli_config, capsys):
    assert run(["describe"], cli_config) == 0
    data = json.loads(capsys.readouterr().out)
    assert data["id"] == "permalink-generator"
    assert data["icon"] == "link"


def test_load_records_file_rejects_scalars(tmp_path):
    path = tmp_path / "bad.yaml"
    path.write_text("just a string\n")

    with pytest.raises(ValueError):
        main.load_records_file(str(path))
