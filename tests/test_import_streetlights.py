import importlib.util
from pathlib import Path

import pytest

SCRIPT = Path(__file__).resolve().parents[1] / "scripts" / "import_streetlights.py"


@pytest.fixture(scope="module")
def importer():
    spec = importlib.util.spec_from_file_location("import_streetlights", SCRIPT)
    module = importlib.util.module_from_spec(spec)
    spec.loader.exec_module(module)
    return module


def test_korean_columns_and_bad_rows(importer, tmp_path):
    csv = tmp_path / "lights.csv"
    csv.write_text(
        "관리번호,위도,경도\n"
        "A-1,37.5668,126.9790\n"
        "A-2,37.5669,126.9791\n"
        "A-2,37.5669,126.9791\n"
        "A-3,not-a-number,126.9\n"
        "A-4,95.0,126.9\n",
        encoding="utf-8",
    )
    df = importer.load_streetlights_csv(csv)
    assert list(df.columns) == ["lat", "lng"]
    assert df.to_dict(orient="records") == [
        {"lat": 37.5668, "lng": 126.979},
        {"lat": 37.5669, "lng": 126.9791},
    ]


def test_english_columns_case_insensitive(importer, tmp_path):
    csv = tmp_path / "lights.csv"
    csv.write_text("ID,Latitude,Longitude\n1,37.5,127.0\n", encoding="utf-8")
    assert len(importer.load_streetlights_csv(csv)) == 1


def test_missing_coordinate_columns(importer, tmp_path):
    csv = tmp_path / "lights.csv"
    csv.write_text("id,address\n1,서울\n", encoding="utf-8")
    with pytest.raises(ValueError):
        importer.load_streetlights_csv(csv)
