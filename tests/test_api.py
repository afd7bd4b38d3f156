from sqlalchemy.exc import OperationalError

from leaguehub.services import leagues as league_service


def test_health_check(client):
    response = client.get("/health")
    assert response.status_code == 200
    assert response.json() == {"status": "healthy"}


def test_database_error_returns_500(logged_client, monkeypatch):
    def broken_query(db, user_id):
        raise OperationalError("SELECT 1", {}, Exception("database is locked"))

    monkeypatch.setattr(league_service, "get_user_leagues", broken_query)

    response = logged_client.get("/leagues")
    assert response.status_code == 500
    assert response.json() == {"detail": "Internal server error"}
