import io

from settlesim.cli import main

CONFIG = "settlement Town 0\nfacility Park 0 1 3 0 1\nplan Town nve\n"


def test_usage_without_arguments(capsys):
    assert main([]) == 0
    assert capsys.readouterr().out == "usage: simulation <config_path>\n"


def test_usage_with_extra_arguments(capsys):
    assert main(["a", "b"]) == 0
    assert "usage: simulation <config_path>" in capsys.readouterr().out


def test_runs_commands_from_stdin(tmp_path, capsys, monkeypatch):
    path = tmp_path / "config.txt"
    path.write_text(CONFIG)
    monkeypatch.setattr("sys.stdin", io.StringIO("step 1\nclose\n"))
    assert main([str(path)]) == 0
    output = capsys.readouterr().out
    assert output.startswith("The simulation has started\n")
    assert "SettlementName: Town\nLifeQuality_Score: 3\n" in output
    assert output.endswith("Simulation closed successfully.\n")


def test_missing_config_reports_error(tmp_path, capsys):
    assert main([str(tmp_path / "absent.txt")]) == 1
    assert "Unable to open configuration file" in capsys.readouterr().err