import datetime

from bs4 import BeautifulSoup
from helpers import make_content

from resume_builder.app.api.routes.route_logic.resume_crud import (
    ResumeCreateParams,
    create_resume,
)


def _create(client, **overrides):
    payload = {"user_id": "user-1", "name": "My Resume"}
    payload.update(overrides)
    return client.post("/api/resumes", json=payload)


def test_get_templates(client):
    response = client.get("/api/resumes/templates")

    assert response.status_code == 200
    assert response.json() == [
        {
            "id": "classic_v1",
            "name": "Classic",
            "description": "Traditional serif layout with a centered header and section dividers.",
        }
    ]


def test_create_resume_with_default_content(client):
    """Test that a resume created without content starts with the default sections."""
    response = _create(client)

    assert response.status_code == 200
    data = response.json()
    assert data["name"] == "My Resume"
    assert data["template_id"] is None

    detail = client.get(f"/api/resumes/{data['id']}").json()
    assert [s["id"] for s in detail["content"]["sections"]] == [
        "experience",
        "skills",
        "education",
    ]
    assert detail["template_id"] == "classic_v1"


def test_create_resume_with_content(client):
    content = make_content({"experience": ["b1"], "projects": []}).to_storage()

    response = _create(client, content=content, template_id="classic_v1")

    assert response.status_code == 200
    detail = client.get(f"/api/resumes/{response.json()['id']}").json()
    assert detail["content"] == content


def test_create_resume_rejects_duplicate_ids(client):
    """Test that client content repeating a reference id is refused."""
    content = make_content({"s1": ["b1"], "s2": ["b1"]}).to_storage()

    response = _create(client, content=content)

    assert response.status_code == 422
    assert response.json()["detail"].startswith("Invalid resume content")
    assert "reference id 'b1' appears 2 times" in response.json()["detail"]


def test_create_resume_rejects_bad_shape(client):
    content = {"sections": [{"id": "s1", "title": "S1", "items": [{"type": "award"}]}]}

    response = _create(client, content=content)

    assert response.status_code == 422
    assert response.json()["detail"].startswith("Invalid resume content")


def test_create_resume_requires_name(client):
    response = _create(client, name="")
    assert response.status_code == 422


def test_create_resume_from_draft(client):
    response = client.post(
        "/api/resumes/from-draft",
        json={"user_id": "user-1", "name": "Draft", "bullet_ids": ["b2", "b1"]},
    )

    assert response.status_code == 200
    detail = client.get(f"/api/resumes/{response.json()['id']}").json()
    experience = detail["content"]["sections"][0]
    assert experience["items"] == [
        {"type": "bullet", "bulletId": "b2"},
        {"type": "bullet", "bulletId": "b1"},
    ]


def test_get_resume_detail_includes_records(client, records):
    """Test that the detail view carries the records the content references."""
    resume = create_resume(
        records,
        ResumeCreateParams(
            user_id="user-1",
            name="With Records",
            content=make_content({"experience": ["p1", "b1", "gone"]}),
        ),
    )

    response = client.get(f"/api/resumes/{resume.id}")

    assert response.status_code == 200
    data = response.json()
    assert [b["id"] for b in data["bullets"]] == ["b1"]
    assert data["bullets"][0]["position"] == {
        "id": "p1",
        "company": "Acme Corp",
        "title": "Senior Engineer",
    }
    assert data["positions"] == [
        {
            "id": "p1",
            "company": "Acme Corp",
            "title": "Senior Engineer",
            "start_date": "2021-03-01",
            "end_date": None,
        }
    ]
    assert len(data["content"]["sections"][0]["items"]) == 3


def test_get_resume_not_found(client):
    response = client.get("/api/resumes/999")
    assert response.status_code == 404


def test_list_resumes_json(client, db):
    """Test that only the user's resumes are listed, newest first."""
    older = create_resume(db, ResumeCreateParams(user_id="user-1", name="older"))
    newer = create_resume(db, ResumeCreateParams(user_id="user-1", name="newer"))
    create_resume(db, ResumeCreateParams(user_id="user-2", name="other"))
    older.updated_at = datetime.datetime(2024, 1, 1)
    newer.updated_at = datetime.datetime(2024, 2, 1)
    db.commit()

    response = client.get("/api/resumes", params={"user_id": "user-1"})

    assert response.status_code == 200
    assert [r["name"] for r in response.json()] == ["newer", "older"]


def test_list_resumes_htmx(client, db):
    create_resume(db, ResumeCreateParams(user_id="user-1", name="Listed"))

    response = client.get(
        "/api/resumes", params={"user_id": "user-1"}, headers={"HX-Request": "true"}
    )

    assert response.status_code == 200
    soup = BeautifulSoup(response.text, "html.parser")
    assert soup.find(attrs={"data-testid": "resume-list"}) is not None
    assert soup.find("a").get_text(strip=True) == "Listed"


def test_list_resumes_requires_user_id(client):
    assert client.get("/api/resumes").status_code == 422


def test_update_template_stores_current_id(client):
    """Test that a legacy template id is stored as its current id."""
    resume_id = _create(client).json()["id"]

    response = client.put(
        f"/api/resumes/{resume_id}/template", json={"template_id": "default"}
    )

    assert response.status_code == 200
    assert response.json()["template_id"] == "classic_v1"


def test_update_template_unknown(client):
    resume_id = _create(client).json()["id"]

    response = client.put(
        f"/api/resumes/{resume_id}/template", json={"template_id": "modern_v9"}
    )

    assert response.status_code == 422
    assert response.json()["detail"] == "Unknown template: modern_v9"


def test_delete_resume_closes_editor_session(client, sessions):
    """Test that deleting a resume removes it and its editor session."""
    resume_id = _create(client).json()["id"]
    client.get(f"/api/resumes/{resume_id}/builder")
    assert sessions.get(resume_id) is not None

    response = client.delete(f"/api/resumes/{resume_id}")

    assert response.status_code == 204
    assert sessions.get(resume_id) is None
    assert client.get(f"/api/resumes/{resume_id}").status_code == 404
