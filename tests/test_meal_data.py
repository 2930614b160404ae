import json

import pytest

from nutrition_engine.services.meal_data import dump_meal_data, load_meal_data
from tests.conftest import make_entry


def test_dump_uses_stored_field_names_in_order() -> None:
    entries = [
        make_entry("a", 195, name="Rice", protein_g=4.1, unit_label="medium portion (150g)"),
        make_entry("b", 232, name="Dal", protein_g=18.0),
    ]
    payload = json.loads(dump_meal_data(entries))

    assert [item["id"] for item in payload] == ["a", "b"]
    assert payload[0]["foodName"] == "Rice"
    assert payload[0]["unit"] == "medium portion (150g)"
    assert payload[0]["calories"] == 195
    assert payload[0]["foodId"] is None
    assert "createdAt" in payload[0]


def test_load_restores_entries() -> None:
    entries = (make_entry("a", 195, name="Rice"), make_entry("b", 232, name="Dal"))
    assert load_meal_data(dump_meal_data(entries)) == entries


def test_load_accepts_decoded_rows() -> None:
    rows = [
        {
            "id": "meal-1",
            "foodId": "fdc:169756",
            "foodName": "Rice",
            "quantity": 2,
            "unit": "cup",
            "calories": 390,
            "protein": 8.1,
            "createdAt": "2025-07-07T08:30:00Z",
        }
    ]
    (entry,) = load_meal_data(rows)

    assert entry.food_ref == "fdc:169756"
    assert entry.quantity == 2
    assert entry.nutrient_snapshot.calories == 390
    assert entry.nutrient_snapshot.fat_g == 0


@pytest.mark.parametrize("raw", [None, "", b""])
def test_missing_meal_data_reads_as_empty(raw: str | bytes | None) -> None:
    assert load_meal_data(raw) == ()


@pytest.mark.parametrize("raw", ["{not json", '{"id": "a"}', '[{"id": "a"}]'])
def test_unreadable_meal_data_reads_as_empty(raw: str) -> None:
    assert load_meal_data(raw) == ()


def test_load_accepts_integer_ids_without_timestamps() -> None:
    raw = json.dumps(
        [
            {
                "id": 1,
                "foodId": 5,
                "foodName": "Rice",
                "quantity": 1,
                "unit": "cup",
                "calories": 300,
            }
        ]
    )
    (entry,) = load_meal_data(raw)

    assert entry.id == "1"
    assert entry.food_ref == "5"
    assert entry.added_at is None
    assert entry.nutrient_snapshot.calories == 300


def test_unreadable_item_is_skipped_and_the_rest_kept() -> None:
    entries = (make_entry("a", 195, name="Rice"), make_entry("b", 232, name="Dal"))
    rows = json.loads(dump_meal_data(entries))
    rows.insert(1, {"id": "broken"})

    loaded = load_meal_data(json.dumps(rows))

    assert [entry.id for entry in loaded] == ["a", "b"]
    assert loaded == entries


def test_entry_without_timestamp_dumps_null() -> None:
    (entry,) = load_meal_data([{"id": 7, "foodName": "Dal", "quantity": 1, "unit": "bowl"}])
    payload = json.loads(dump_meal_data([entry]))
    assert payload[0]["createdAt"] is None
    assert payload[0]["id"] == "7"
