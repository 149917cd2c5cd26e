"""HTTP API tests through FastAPI's TestClient."""
import uuid

import pytest
from fastapi.testclient import TestClient

from trainlog.core.context import AppContext
from trainlog.core.exceptions import InvalidParameterError
from trainlog.main import create_app


def create(client, **body):
    payload = {"date": "2025-12-01", "activityType": "RUN", "status": "COMPLETED"}
    payload.update(body)
    response = client.post("/api/workouts", json=payload)
    assert response.status_code == 201, response.text
    return response.json()


def test_health(client):
    response = client.get("/health")
    assert response.status_code == 200
    assert response.json() == {"status": "healthy", "service": "trainlog-backend"}


class TestWorkoutCrud:

    def test_create_and_get(self, client):
        created = create(client, actualDistanceKm=5.0, actualTimeMin=28)

        assert created["date"] == "2025-12-01"
        assert created["activityType"] == "RUN"
        assert created["actualDistanceKm"] == 5.0
        assert created["exercises"] == []

        fetched = client.get(f"/api/workouts/{created['id']}").json()
        assert fetched == created

    def test_weight_training_with_exercises(self, client):
        created = create(
            client,
            date="2025-12-08",
            activityType="WEIGHT_TRAINING",
            status="PENDING",
            exercises=[{"name": "Squat", "sets": "3x10"}, {"name": "Bench", "sets": "4x8"}],
        )
        assert [ex["name"] for ex in created["exercises"]] == ["Squat", "Bench"]
        assert all(ex["id"] for ex in created["exercises"])

    def test_update(self, client):
        created = create(client, actualDistanceKm=5.0)

        response = client.put(
            f"/api/workouts/{created['id']}",
            json={"date": "2025-12-02", "activityType": "RUN", "status": "COMPLETED", "actualDistanceKm": 6.5},
        )
        assert response.status_code == 200
        assert response.json()["date"] == "2025-12-02"
        assert response.json()["actualDistanceKm"] == 6.5

    def test_delete(self, client):
        created = create(client)

        response = client.delete(f"/api/workouts/{created['id']}")
        assert response.status_code == 200
        body = response.json()
        assert body["message"] == "Treino excluído com sucesso."
        assert body["workout"]["id"] == created["id"]

        assert client.get(f"/api/workouts/{created['id']}").status_code == 404

    def test_missing_workout(self, client):
        missing = uuid.uuid4()
        body = {"date": "2025-12-01", "activityType": "RUN"}

        response = client.get(f"/api/workouts/{missing}")
        assert response.status_code == 404
        assert response.json()["detail"] == f"Treino {missing} não encontrado."

        assert client.put(f"/api/workouts/{missing}", json=body).status_code == 404
        assert client.delete(f"/api/workouts/{missing}").status_code == 404

    def test_malformed_id(self, client):
        assert client.get("/api/workouts/not-a-uuid").status_code == 422

    def test_rejects_negative_distance(self, client):
        response = client.post(
            "/api/workouts",
            json={"date": "2025-12-01", "activityType": "RUN", "actualDistanceKm": -1},
        )
        assert response.status_code == 422

    def test_list_filters(self, client):
        create(client, date="2025-11-28")
        create(client, date="2025-12-03")
        create(client, date="2025-12-08", activityType="WEIGHT_TRAINING", status="PENDING")

        dates = [w["date"] for w in client.get("/api/workouts").json()]
        assert dates == ["2025-12-08", "2025-12-03", "2025-11-28"]

        december = client.get("/api/workouts", params={"year": 2025, "month": 12}).json()
        assert len(december) == 2

        lifting = client.get("/api/workouts", params={"type": "WEIGHT_TRAINING"}).json()
        assert [w["date"] for w in lifting] == ["2025-12-08"]

        completed = client.get("/api/workouts", params={"status": "COMPLETED", "limit": 1}).json()
        assert [w["date"] for w in completed] == ["2025-12-03"]

        assert client.get("/api/workouts", params={"month": 13}).status_code == 422


class TestForms:

    def test_new_form_is_dated_today(self, client):
        form = client.get("/api/workouts/form/new").json()

        assert form["date"] == "2025-12-03"
        assert form["activityType"] == "RUN"
        assert form["status"] == "PENDING"
        assert len(form["weightExercises"]) == 1

    def test_create_from_form(self, client):
        response = client.post(
            "/api/workouts/form",
            json={
                "date": "2025-12-03",
                "activityType": "RUN",
                "status": "COMPLETED",
                "actualDistanceKm": "7,5",
                "actualTimeMin": "40",
                "description": "  ",
            },
        )
        assert response.status_code == 201
        body = response.json()
        assert body["actualDistanceKm"] == 7.5
        assert body["actualTimeMin"] == 40
        assert body["description"] is None

    def test_completed_run_without_distance(self, client):
        response = client.post(
            "/api/workouts/form",
            json={"date": "2025-12-03", "activityType": "RUN", "status": "COMPLETED"},
        )
        assert response.status_code == 422
        assert response.json()["detail"] == (
            "Treino de Corrida concluído deve ter a Distância Real preenchida."
        )

    def test_unparseable_number(self, client):
        response = client.post(
            "/api/workouts/form",
            json={"date": "2025-12-03", "activityType": "RUN", "actualDistanceKm": "abc"},
        )
        assert response.status_code == 422

    def test_edit_round_trip(self, client):
        created = create(
            client,
            date="2025-12-08",
            activityType="WEIGHT_TRAINING",
            exercises=[{"name": "Squat", "sets": "3x10"}],
        )

        form = client.get(f"/api/workouts/{created['id']}/form").json()
        assert form["weightExercises"][0]["name"] == "Squat"

        form["weightExercises"].append({"id": "", "name": "Row", "sets": "3x12"})
        response = client.put(f"/api/workouts/{created['id']}/form", json=form)
        assert response.status_code == 200
        assert [ex["name"] for ex in response.json()["exercises"]] == ["Squat", "Row"]

    def test_edit_form_for_missing_workout(self, client):
        assert client.get(f"/api/workouts/{uuid.uuid4()}/form").status_code == 404


class TestTimeline:

    def test_grouped_history(self, client):
        create(client, date="2025-12-01", actualDistanceKm=5.0)
        create(client, date="2025-12-03", actualDistanceKm=7.5)
        create(
            client,
            date="2025-12-08",
            activityType="WEIGHT_TRAINING",
            status="PENDING",
            exercises=[{"name": "Squat", "sets": "3x10"}],
        )
        create(client, date="2024-06-10")

        body = client.get("/api/timeline").json()

        assert body["years"] == [2025, 2024]
        assert body["totalWorkouts"] == 4
        assert [m["monthKey"] for m in body["months"]] == ["2025-12", "2024-06"]

        december = body["months"][0]
        assert december["monthName"] == "Dezembro de 2025"
        assert [w["weekStartDate"] for w in december["weeks"]] == ["2025-12-08", "2025-12-01"]
        assert [w["weekNumber"] for w in december["weeks"]] == [50, 49]
        assert [w["date"] for w in december["weeks"][1]["workouts"]] == ["2025-12-01", "2025-12-03"]

    def test_filtered_by_year(self, client):
        create(client, date="2025-12-01")
        create(client, date="2024-06-10")

        body = client.get("/api/timeline", params={"year": 2024}).json()

        assert body["years"] == [2025, 2024]
        assert body["totalWorkouts"] == 1
        assert [m["monthKey"] for m in body["months"]] == ["2024-06"]

    def test_empty(self, client):
        assert client.get("/api/timeline").json() == {"years": [], "totalWorkouts": 0, "months": []}


class TestDashboard:

    @pytest.fixture
    def history(self, client):
        create(client, date="2025-12-01", actualDistanceKm=5.0)
        create(client, date="2025-11-28", actualDistanceKm=3.0)
        create(client, date="2024-07-01", actualDistanceKm=10.0)
        create(client, date="2025-12-02", status="PENDING", actualDistanceKm=20.0)

    @pytest.mark.parametrize("timeframe,metric,value", [
        ("ALL", "COUNT_COMPLETED", 3),
        ("ALL", "SUM_DISTANCE", 18.0),
        ("YEAR", "SUM_DISTANCE", 8.0),
        ("MONTH", "SUM_DISTANCE", 5.0),
        ("WEEK", "SUM_DISTANCE", 5.0),
        ("WEEK", "COUNT_COMPLETED", 1),
    ])
    def test_summary(self, client, history, timeframe, metric, value):
        response = client.get(
            "/api/dashboard/summary",
            params={"timeframe": timeframe, "metric": metric},
        )
        assert response.status_code == 200
        assert response.json()["value"] == value

    def test_summary_display(self, client, history):
        body = client.get("/api/dashboard/summary", params={"timeframe": "year", "metric": "distance"}).json()
        assert body == {
            "timeframe": "YEAR",
            "metric": "SUM_DISTANCE",
            "value": 8.0,
            "displayValue": "8.0",
            "unit": "km",
            "subtitle": "Acumulado em 2025",
        }

    def test_cards(self, client, history):
        cards = client.get("/api/dashboard/cards").json()

        assert [c["title"] for c in cards] == [
            "Treinos Concluídos",
            "Distância no Ano",
            "Distância no Mês",
            "Distância na Semana",
        ]
        assert [c["displayValue"] for c in cards] == ["3", "8.0", "5.0", "5.0"]

    def test_unknown_parameters(self, client):
        response = client.get("/api/dashboard/summary", params={"timeframe": "DECADE"})
        assert response.status_code == 422
        assert "DECADE" in response.json()["detail"]

        assert client.get("/api/dashboard/summary", params={"metric": "PACE"}).status_code == 422


class TestDisplayLocale:

    def test_timeline_uses_configured_locale(self, settings):
        english = settings.model_copy(update={"DISPLAY_LOCALE": "en-US"})
        with TestClient(create_app(context=AppContext.create(english))) as client:
            create(client, date="2025-12-08")
            month = client.get("/api/timeline").json()["months"][0]

        assert month["monthName"] == "December 2025"
        assert month["weeks"][0]["weekStart"] == "Mon, December 8"

    def test_unsupported_locale_fails_at_startup(self, settings):
        french = settings.model_copy(update={"DISPLAY_LOCALE": "fr-FR"})

        with pytest.raises(InvalidParameterError):
            AppContext.create(french)
