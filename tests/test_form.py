import pytest

from app.form import FormCollector, NO_CHILD_MESSAGE, DEFAULT_PHILOSOPHY
from app.planning import ChildRecord


def test_starts_with_one_empty_row():
    form = FormCollector()
    assert len(form.children) == 1
    assert form.children[0].name == "" and form.children[0].age == "" and form.children[0].grade == ""
    assert form.philosophy == DEFAULT_PHILOSOPHY


def test_add_gives_unique_ids():
    form = FormCollector()
    for _ in range(5):
        form.add_child()
    ids = [c.id for c in form.children]
    assert len(set(ids)) == len(ids) == 6


def test_ids_continue_after_existing_rows():
    form = FormCollector(children=[ChildRecord(id=7, name="Emma")])
    assert form.add_child().id == 8


def test_update_and_remove():
    form = FormCollector()
    second = form.add_child()
    form.update_child(second.id, "name", "Noah")
    assert form.children[1].name == "Noah"
    form.remove_child(form.children[0].id)
    assert [c.name for c in form.children] == ["Noah"]
    # last row stays
    form.remove_child(second.id)
    assert len(form.children) == 1


def test_reset():
    form = FormCollector(children=[ChildRecord(id=1, name="Emma")], location="Ontario", goals="Math")
    form.add_child()
    form.reset()
    assert len(form.children) == 1 and form.children[0].name == ""
    assert (form.location, form.goals) == ("", "")


def test_preview_requires_a_child():
    assert FormCollector().preview() == NO_CHILD_MESSAGE


def test_preview_text():
    form = FormCollector(children=[ChildRecord(id=1, name="Emma", age="10", grade="4")], location="BC")
    text = form.preview()
    assert "Children: Emma (age 10, grade 4)" in text
    assert "Location: BC" in text
    assert "Parent priorities: Not specified" in text


def test_from_form_and_payload():
    form = FormCollector.from_form({
        "child_id_0": "3", "child_name_0": "Emma", "child_age_0": "10", "child_grade_0": "4",
        "child_id_1": "3", "child_name_1": "", "child_age_1": "7", "child_grade_1": "",
        "philosophy": "Montessori", "location": "", "goals": "Reading",
    })
    ids = [c.id for c in form.children]
    assert ids[0] == 3 and ids[1] != 3
    payload = form.to_payload()
    assert payload["philosophy"] == "Montessori"
    assert [c["name"] for c in payload["children"]] == ["Emma", ""]


def test_apply_actions():
    form = FormCollector()
    form.apply("add")
    assert len(form.children) == 2
    form.apply(f"remove:{form.children[0].id}")
    assert len(form.children) == 1
    form.apply("remove:not-a-number")
    assert len(form.children) == 1


def test_form_page(local_client):
    r = local_client.get("/")
    assert r.status_code == 200
    assert "Charlotte Mason" in r.text
    assert 'name="child_name_0"' in r.text
    assert "Remove" not in r.text


def test_form_add_row(local_client):
    r = local_client.post("/", data={"child_id_0": "1", "child_name_0": "Emma", "action": "add"})
    assert 'name="child_name_1"' in r.text
    assert "Remove" in r.text


def test_form_preview(local_client):
    r = local_client.post("/", data={
        "child_id_0": "1", "child_name_0": "Emma", "child_age_0": "10", "child_grade_0": "4",
        "action": "preview",
    })
    assert "Emma (age 10, grade 4)" in r.text
    assert "Next step (future)" in r.text


def test_form_generate_local(local_client):
    r = local_client.post("/", data={"child_id_0": "1", "child_age_0": "7", "action": "generate"})
    assert "Child 1 (age 7, grade ?)" in r.text
    assert "(local fallback)" in r.text


def test_form_generate_without_child(local_client):
    r = local_client.post("/", data={"child_id_0": "1", "action": "generate"})
    assert "At least one child is required." in r.text


def test_form_generate_ai(ai_client):
    r = ai_client.post("/", data={"child_id_0": "1", "child_name_0": "Emma", "action": "generate"})
    assert "A lovely year ahead." in r.text


def test_from_form_fills_rows_by_id():
    form = FormCollector.from_form({
        "child_id_0": "", "child_name_0": "Emma", "child_age_0": "10",
        "child_id_1": "", "child_name_1": "Noah", "child_grade_1": "2",
    })
    assert len({c.id for c in form.children}) == 2
    assert [(c.name, c.age, c.grade) for c in form.children] == [("Emma", "10", ""), ("Noah", "", "2")]


def test_update_child_rejects_unknown_field():
    form = FormCollector()
    with pytest.raises(ValueError):
        form.update_child(form.children[0].id, "school", "Maple")
