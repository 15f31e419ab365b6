import json

from app_regex.config import DEFAULT_CONFIG, AnalyzerConfig, config_from_dict, load_config


def write_config(tmp_path, data):
    path = tmp_path / 'config.json'
    path.write_text(json.dumps(data), encoding='utf-8')
    return str(path)


def test_defaults():
    assert DEFAULT_CONFIG == AnalyzerConfig(
        verbose=False, recursive_aar=True, boundary_aware=False, separator=":")


def test_load_config(tmp_path):
    path = write_config(tmp_path, {"boundary_aware": True, "separator": ";", "unknown": 1})
    config = load_config(path)
    assert config.boundary_aware is True
    assert config.separator == ";"
    assert config.recursive_aar is True


def test_wrong_types_fall_back_to_defaults(capsys):
    config = config_from_dict({"verbose": "yes", "recursive_aar": False, "separator": ""})
    assert config == AnalyzerConfig(recursive_aar=False)
    err = capsys.readouterr().err
    assert "'verbose' should be bool" in err
    assert "'separator' must not be empty" in err


def test_missing_file_gives_defaults(tmp_path, capsys):
    assert load_config(str(tmp_path / 'absent.json')) is DEFAULT_CONFIG
    assert "not found" in capsys.readouterr().err
    assert load_config(None) is DEFAULT_CONFIG


def test_invalid_json_gives_defaults(tmp_path, capsys):
    path = tmp_path / 'config.json'
    path.write_text('{"verbose": tru', encoding='utf-8')
    assert load_config(str(path)) is DEFAULT_CONFIG
    assert "Invalid JSON" in capsys.readouterr().err


def test_non_object_json_gives_defaults(tmp_path):
    assert load_config(write_config(tmp_path, ["verbose"])) is DEFAULT_CONFIG


def test_with_overrides_skips_none():
    config = AnalyzerConfig(boundary_aware=True).with_overrides(
        boundary_aware=None, verbose=True, separator=None)
    assert config == AnalyzerConfig(boundary_aware=True, verbose=True)
