import hashlib
import io

import pytest
import yaml

from digest_report import EXAMPLE_TEXTS, build_report, main, read_input_file, write_report
from errors import InvalidArgument


def test_build_report_structure():
    report = build_report([("greeting", "Hello, World!")])

    assert report["format"] == "hex"
    assert report["total_inputs"] == 1
    entry = report["inputs"][0]
    assert entry == {
        "label": "greeting",
        "text": "Hello, World!",
        "utf8_bytes": 13,
        "blocks": 1,
        "digest": "dffd6021bb2bd5b0af676290809ec3a53191dd81c7f70a4b28688a362182986f",
    }


def test_build_report_trace_records_each_block():
    text = "y" * 100
    report = build_report([("long", text)], fmt="base64", trace=True)
    entry = report["inputs"][0]

    assert entry["blocks"] == 2
    assert len(entry["chaining_values"]) == 2
    assert all(len(state) == 8 for state in entry["chaining_values"])
    assert all(len(word) == 8 for state in entry["chaining_values"] for word in state)
    last = bytes.fromhex("".join(entry["chaining_values"][-1]))
    assert last == hashlib.sha256(text.encode()).digest()


def test_build_report_rejects_bad_format():
    with pytest.raises(InvalidArgument):
        build_report([("x", "x")], fmt="base32")


def test_example_texts_digests():
    report = build_report(EXAMPLE_TEXTS)

    assert report["total_inputs"] == 4
    for entry, (label, text) in zip(report["inputs"], EXAMPLE_TEXTS):
        assert entry["label"] == label
        assert entry["digest"] == hashlib.sha256(text.encode("utf-8")).hexdigest()
    assert [entry["label"] for entry in report["inputs"]] == ["text", "password", "email", "url"]
    assert report["inputs"][0]["digest"] == (
        "dffd6021bb2bd5b0af676290809ec3a53191dd81c7f70a4b28688a362182986f"
    )
    assert report["inputs"][3]["text"] == "https://www.example.com/page"
    assert report["inputs"][3]["utf8_bytes"] == 28


def test_read_input_file_strips_newlines():
    entries = read_input_file(io.StringIO("abc\r\n\nlast"))
    assert entries == [("line 1", "abc"), ("line 2", ""), ("line 3", "last")]


def test_write_report_round_trips_unicode():
    stream = io.StringIO()
    write_report(build_report([("u", "你好世界 🌍")]), stream)

    assert "你好世界" in stream.getvalue()
    assert yaml.safe_load(stream.getvalue())["inputs"][0]["text"] == "你好世界 🌍"


def test_main_writes_yaml_file(tmp_path, capsys):
    source = tmp_path / "texts.txt"
    source.write_text("abc\nhello\n", encoding="utf-8")
    output = tmp_path / "report.yaml"

    assert main(["--input", str(source), "--output", str(output)]) == 0

    report = yaml.safe_load(output.read_text(encoding="utf-8"))
    assert [entry["text"] for entry in report["inputs"]] == ["abc", "hello"]
    assert report["inputs"][0]["digest"] == (
        "ba7816bf8f01cfea414140de5dae2223b00361a396177a9cb410ff61f20015ad"
    )
    assert "Saved 2 digests" in capsys.readouterr().err


def test_main_examples_to_stdout(capsys):
    assert main(["extra", "--examples", "--format", "base64"]) == 0

    report = yaml.safe_load(capsys.readouterr().out)
    assert report["format"] == "base64"
    assert report["total_inputs"] == 5
    assert report["inputs"][0]["label"] == "arg 1"
    assert all(len(entry["digest"]) == 44 for entry in report["inputs"])


def test_main_without_inputs_fails(capsys):
    assert main([]) == 1
    assert "no input texts" in capsys.readouterr().err


def test_main_missing_input_file(tmp_path, capsys):
    assert main(["--input", str(tmp_path / "missing.txt")]) == 1
    assert "cannot read" in capsys.readouterr().err


def test_main_unwritable_output(tmp_path, capsys):
    output = tmp_path / "missing-dir" / "report.yaml"

    assert main(["abc", "--output", str(output)]) == 1

    captured = capsys.readouterr()
    assert "cannot write" in captured.err
    assert not output.exists()
