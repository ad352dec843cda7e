# test_config_reader.py
# -------------------------------------------------------------
# Flat "Key: value" config loading.
# -------------------------------------------------------------

import pytest

from config_reader import read_config
from models import ConfigError, ConfigKeyMissingError, ConfigParameters

CONTENT = """\
InputFolder: data/input
ErrorFolder:   data/error
ArchiveFolder: data/archive
OutputFolder: data/output
lineNo: 250
"""


def write(tmp_path, content):
    path = tmp_path / "app_config.txt"
    path.write_text(content, encoding="utf-8")
    return str(path)


def test_reads_all_keys(tmp_path):
    params = read_config(write(tmp_path, CONTENT))
    assert params == ConfigParameters(
        input_folder="data/input",
        error_folder="data/error",
        archive_folder="data/archive",
        output_folder="data/output",
        num_of_lines=250,
    )


def test_rereading_unchanged_file_is_idempotent(tmp_path):
    path = write(tmp_path, CONTENT)
    assert read_config(path) == read_config(path)


def test_rereading_picks_up_changes(tmp_path):
    path = write(tmp_path, CONTENT)
    first = read_config(path)
    write(tmp_path, CONTENT.replace("lineNo: 250", "lineNo: 10"))
    assert read_config(path).num_of_lines == 10
    assert first.num_of_lines == 250


def test_missing_key(tmp_path):
    path = write(tmp_path, CONTENT.replace("ArchiveFolder: data/archive\n", ""))
    with pytest.raises(ConfigKeyMissingError) as exc:
        read_config(path)
    assert exc.value.key == "ArchiveFolder"
    assert isinstance(exc.value, ConfigError)


def test_empty_value_does_not_borrow_next_line(tmp_path):
    params = read_config(write(tmp_path, CONTENT.replace("InputFolder: data/input", "InputFolder:")))
    assert params.input_folder == ""
    assert params.error_folder == "data/error"


def test_line_count_must_be_integer(tmp_path):
    with pytest.raises(ConfigError):
        read_config(write(tmp_path, CONTENT.replace("250", "many")))


def test_missing_file(tmp_path):
    with pytest.raises(ConfigError):
        read_config(str(tmp_path / "absent.txt"))


@pytest.mark.parametrize("value", ["0", "-3"])
def test_line_count_must_be_positive(tmp_path, value):
    with pytest.raises(ConfigError):
        read_config(write(tmp_path, CONTENT.replace("250", value)))
