import logging

import pandas as pd
import pytest

import export_stripes

SHELF = """Red rgb(255,0,0)
not a color
Green rgb(0,255,0)
Blue rgb(0,0,255)
"""


def test_export_stripes_writes_html_and_csv(tmp_path):
    input_file = tmp_path / "shelf.txt"
    input_file.write_text(SHELF, encoding='utf-8')
    out_dir = tmp_path / "out"

    status = export_stripes.main([str(input_file), "--output-dir", str(out_dir), "--groups", "3", "--csv"])

    assert status == 0
    page = (out_dir / "shelf_stripes.html").read_text(encoding='utf-8')
    assert page.count('class="divider"') == 2
    assert 'not a color' not in page

    df = pd.read_csv(out_dir / "shelf_stripes.csv")
    assert df['title'].tolist() == ['Blue', 'Red', 'Green']
    assert df['group'].tolist() == [0, 1, 2]


def test_export_stripes_respects_method(tmp_path):
    input_file = tmp_path / "shelf.txt"
    input_file.write_text(SHELF, encoding='utf-8')

    written = export_stripes.export_stripes(input_file, tmp_path, method='hsv')

    assert written == [tmp_path / "shelf_stripes.html"]
    page = written[0].read_text(encoding='utf-8')
    assert page.index('>Red<') < page.index('>Green<') < page.index('>Blue<')


def test_missing_input_sets_exit_status(tmp_path):
    input_file = tmp_path / "shelf.txt"
    input_file.write_text(SHELF, encoding='utf-8')

    status = export_stripes.main([str(tmp_path / "missing.txt"), str(input_file), "--output-dir", str(tmp_path)])

    assert status == 1
    assert (tmp_path / "shelf_stripes.html").exists()


@pytest.mark.parametrize("groups", ["0", "5", "two"])
def test_group_count_out_of_range(tmp_path, groups):
    with pytest.raises(SystemExit):
        export_stripes.main(["shelf.txt", "--groups", groups, "--output-dir", str(tmp_path)])


def test_undecodable_input_sets_exit_status(tmp_path):
    bad_file = tmp_path / "latin.txt"
    bad_file.write_bytes("Caf\xe9 rgb(1,2,3)\n".encode('latin-1'))
    input_file = tmp_path / "shelf.txt"
    input_file.write_text(SHELF, encoding='utf-8')

    status = export_stripes.main([str(bad_file), str(input_file), "--output-dir", str(tmp_path)])

    assert status == 1
    assert not (tmp_path / "latin_stripes.html").exists()
    assert (tmp_path / "shelf_stripes.html").exists()


def test_duplicate_input_names_are_reported(tmp_path, caplog):
    for folder in ("a", "b"):
        (tmp_path / folder).mkdir()
        (tmp_path / folder / "shelf.txt").write_text(SHELF, encoding='utf-8')
    out_dir = tmp_path / "out"

    with caplog.at_level(logging.WARNING, logger="export_stripes"):
        status = export_stripes.main([
            str(tmp_path / "a" / "shelf.txt"), str(tmp_path / "b" / "shelf.txt"),
            "--output-dir", str(out_dir),
        ])

    assert status == 0
    assert "2 inputs share the name 'shelf'" in caplog.text
