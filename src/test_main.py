import json

import pytest

from main import main

GEDCOM = """\
0 HEAD
1 SOUR TEST
1 GEDC
2 VERS 5.5.1
2 FORM LINEAGE-LINKED
1 CHAR UTF-8
0 @I1@ INDI
1 NAME John /Smith/
1 SEX M
1 BIRT
2 DATE 1900
1 FAMC @F1@
0 @I2@ INDI
1 NAME Henry /Smith/
1 SEX M
1 FAMS @F1@
0 @I3@ INDI
1 NAME Mary /Jones/
1 SEX F
1 RESN privacy
1 FAMS @F1@
0 @F1@ FAM
1 HUSB @I2@
1 WIFE @I3@
1 CHIL @I1@
0 TRLR
"""


@pytest.fixture
def gedcom_file(tmp_path):
    path = tmp_path / "family.ged"
    path.write_text(GEDCOM, encoding="utf-8")
    return path


def test_unknown_individual(gedcom_file, capsys):
    assert main([str(gedcom_file), "I99"]) == 1

    captured = capsys.readouterr()
    assert "Error: Individual 'I99' not found" in captured.err
    assert captured.out == ""


def test_hidden_individual(gedcom_file, capsys):
    assert main([str(gedcom_file), "I3", "--update"]) == 1

    captured = capsys.readouterr()
    assert "Error: Access to individual 'I3' denied" in captured.err
    assert captured.out == ""


def test_update_prints_tree_only(gedcom_file, capsys):
    assert main([str(gedcom_file), "I1", "--update", "--generations", "2"]) == 0

    data = json.loads(capsys.readouterr().out)
    assert data["xref"] == "I1"
    assert data["generation"] == 1
    assert data["timespan"] == "Born: 1900"
    assert [c["xref"] for c in data["children"]] == ["I2", "I3"]
    assert "updateUrl" not in data
    assert "labels" not in data


def test_output_file(gedcom_file, tmp_path, capsys):
    output = tmp_path / "chart.json"
    args = [str(gedcom_file), "I1", "--output", str(output), "--generations", "15",
            "--fan-degree", "90", "--hide-empty-segments"]
    assert main(args) == 0

    assert capsys.readouterr().out == ""
    payload = json.loads(output.read_text(encoding="utf-8"))
    assert payload["generations"] == 10
    assert payload["fanDegree"] == 180
    assert payload["hideEmptySegments"] is True
    assert payload["showColorGradients"] is False
    assert payload["data"]["xref"] == "I1"
    assert payload["updateUrl"].endswith("&xref=")


def test_config_file(gedcom_file, tmp_path, capsys):
    config = tmp_path / "chart.toml"
    config.write_text(
        'default_generations = 3\ntree_name = "demo"\n\n[theme]\nchart-font-color = "123456"\n',
        encoding="utf-8",
    )
    assert main([str(gedcom_file), "I1", "--config", str(config)]) == 0

    payload = json.loads(capsys.readouterr().out)
    assert payload["generations"] == 3
    assert payload["fontColor"] == "#123456"
    assert "ged=demo" in payload["updateUrl"]
