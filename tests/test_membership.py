import pytest

from conftest import create_user, login


@pytest.fixture(name="league_id")
def league_id_fixture(client, session):
    owner = create_user(session, "owner@example.com", "Owner")
    login(client, session, owner)
    response = client.post("/leagues", data={"name": "Members Only"})
    return response.json()["newLeagueDoc"]["id"]


@pytest.fixture(name="outsider")
def outsider_fixture(client, session, league_id):
    outsider = create_user(session, "outsider@example.com", "Outsider")
    login(client, session, outsider)
    return outsider


def test_outsider_cannot_edit(client, outsider, league_id):
    response = client.put(f"/leagues/{league_id}", data={"name": "Hijacked"})
    assert response.status_code == 403


def test_outsider_cannot_leave(client, outsider, league_id):
    response = client.patch(f"/leagues/{league_id}/leave")
    assert response.status_code == 403


def test_outsider_cannot_delete(client, outsider, league_id):
    response = client.delete(f"/leagues/{league_id}")
    assert response.status_code == 403


def test_missing_league_is_not_found(client, outsider):
    assert client.put("/leagues/9999", data={"name": "Ghost"}).status_code == 404
    assert client.patch("/leagues/9999/leave").status_code == 404
    assert client.delete("/leagues/9999").status_code == 404


def test_guard_requires_login(client, session, league_id):
    client.cookies.clear()
    assert client.delete(f"/leagues/{league_id}").status_code == 401


def test_outsider_can_act_after_joining(client, outsider, league_id):
    client.patch("/leagues/join", json={"inviteKey": str(league_id)})

    response = client.put(f"/leagues/{league_id}", data={"description": "Now a member"})
    assert response.status_code == 200
