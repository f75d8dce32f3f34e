import json
import logging

import pytest

from tlasca.config import AlgorithmConfig, Config, PathsConfig, load_config


def _write(tmp_path, content):
    path = tmp_path / "go-tlasca.json"
    path.write_text(content, encoding="utf-8")
    return path


def test_missing_file_returns_defaults_and_warns(tmp_path, caplog):
    logger = logging.getLogger("tlasca.test.config")
    missing = tmp_path / "absent.json"
    with caplog.at_level(logging.WARNING, logger="tlasca.test.config"):
        cfg = load_config(missing, logger)
    assert cfg == Config()
    assert cfg.paths.data_dir == "data"
    assert cfg.paths.results_dir == "results"
    assert cfg.paths.output_filename == "result.png"
    assert cfg.algorithm.window_size == 1
    assert any("not found" in record.getMessage() for record in caplog.records)


def test_full_file_overrides_everything(tmp_path):
    document = {
        "paths": {
            "data_dir": "frames",
            "results_dir": "out",
            "output_filename": "map.png",
        },
        "algorithm": {"window_size": 5},
    }
    cfg = load_config(_write(tmp_path, json.dumps(document)), logging.getLogger())
    assert cfg == Config(
        paths=PathsConfig(data_dir="frames", results_dir="out", output_filename="map.png"),
        algorithm=AlgorithmConfig(window_size=5),
    )


def test_partial_file_keeps_remaining_defaults(tmp_path):
    cfg = load_config(_write(tmp_path, '{"paths": {"data_dir": "input"}}'))
    assert cfg.paths.data_dir == "input"
    assert cfg.paths.results_dir == PathsConfig().results_dir
    assert cfg.paths.output_filename == PathsConfig().output_filename
    assert cfg.algorithm == AlgorithmConfig()


def test_keys_match_case_insensitively(tmp_path):
    cfg = load_config(_write(tmp_path, '{"Algorithm": {"WINDOW_SIZE": 3}}'))
    assert cfg.algorithm.window_size == 3


def test_unknown_keys_and_nulls_are_ignored(tmp_path):
    content = '{"extra": 1, "paths": {"data_dir": null, "other": "x"}, "algorithm": null}'
    cfg = load_config(_write(tmp_path, content))
    assert cfg == Config()


def test_top_level_null_gives_defaults(tmp_path):
    assert load_config(_write(tmp_path, "null")) == Config()


def test_invalid_json_raises(tmp_path):
    with pytest.raises(ValueError):
        load_config(_write(tmp_path, "{not json"))


@pytest.mark.parametrize(
    "content",
    [
        '{"algorithm": {"window_size": "3"}}',
        '{"algorithm": {"window_size": 2.5}}',
        '{"algorithm": {"window_size": true}}',
        '{"paths": {"data_dir": 7}}',
        '{"paths": []}',
        "[1, 2]",
    ],
)
def test_type_mismatch_raises(tmp_path, content):
    with pytest.raises(ValueError):
        load_config(_write(tmp_path, content))


def test_window_size_overflow_raises(tmp_path):
    with pytest.raises(ValueError):
        load_config(_write(tmp_path, '{"algorithm": {"window_size": 99999999999999999999}}'))


def test_unreadable_path_raises_os_error(tmp_path):
    with pytest.raises(OSError):
        load_config(tmp_path)