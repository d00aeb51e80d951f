import json

from critters.cli import main


def test_run_json_frames(capsys):
    code = main(["run", "--frames", "5", "--json", "--seed", "3", "--scene", "bird",
                 "--width", "320", "--height", "240"])
    out = capsys.readouterr().out

    assert code == 0
    lines = [line for line in out.splitlines() if line.strip()]
    assert len(lines) == 5

    frames = [json.loads(line) for line in lines]
    assert [f['tick_count'] for f in frames] == [1, 2, 3, 4, 5]
    assert all(f['species'] == 'bird' for f in frames)
    assert frames[0]['viewport'] == [320.0, 240.0]


def test_run_json_is_reproducible(capsys):
    main(["run", "--frames", "20", "--json", "--seed", "11"])
    first = capsys.readouterr().out
    main(["run", "--frames", "20", "--json", "--seed", "11"])
    second = capsys.readouterr().out

    assert first == second


def test_run_summary(capsys):
    code = main(["run", "--frames", "10", "--summary-every", "5", "--scene", "bugs"])
    out = capsys.readouterr().out

    assert code == 0
    assert "Scene: bug" in out
    assert "[OK] Run complete" in out


def test_unknown_scene_reports_error(capsys):
    code = main(["run", "--frames", "1", "--scene", "lizard"])
    captured = capsys.readouterr()

    assert code == 2
    assert "[ERROR]" in captured.err
    assert "lizard" in captured.err


def test_missing_config_reports_error(tmp_path, capsys):
    code = main(["run", "--frames", "1", "--config", str(tmp_path / "nope.yaml")])

    assert code == 2
    assert "[ERROR]" in capsys.readouterr().err
