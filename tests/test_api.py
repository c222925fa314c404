"""
Tests de la API HTTP (AsyncClient sobre la app ASGI, sin servidor).
"""
import pytest

API = "/api/v1"


# -------- públicos --------
@pytest.mark.asyncio
async def test_root_and_health(client):
    root = await client.get("/")
    assert root.status_code == 200
    assert root.json()["api_v1"] == API

    health = await client.get(f"{API}/health")
    assert health.status_code == 200
    assert health.json()["status"] == "ok"
    assert health.json()["collections"]["companies"] == 2


# -------- autenticación --------
@pytest.mark.asyncio
async def test_login_success(client):
    response = await client.post(f"{API}/auth/login", json={
        "email": "admin@empresa.com",
        "password": "admin123",
    })

    assert response.status_code == 200
    body = response.json()
    assert body["token_type"] == "bearer"
    assert body["user"]["role"] == "admin"
    assert body["user"]["companyId"] == "company-1"

    me = await client.get(f"{API}/auth/me", headers={"Authorization": f"Bearer {body['access_token']}"})
    assert me.status_code == 200
    assert me.json()["email"] == "admin@empresa.com"


@pytest.mark.asyncio
async def test_login_wrong_password(client):
    response = await client.post(f"{API}/auth/login", json={
        "email": "admin@empresa.com",
        "password": "errada",
    })
    assert response.status_code == 401
    assert response.json()["code"] == "INVALID_CREDENTIALS"


@pytest.mark.asyncio
async def test_login_malformed_payload(client):
    response = await client.post(f"{API}/auth/login", json={"email": "sem-arroba"})
    assert response.status_code == 400
    assert response.json()["code"] == "VALIDATION_ERROR"


@pytest.mark.asyncio
@pytest.mark.parametrize("headers", [{}, {"Authorization": "Bearer token-invalido"}])
async def test_protected_route_without_session(client, headers):
    response = await client.get(f"{API}/auth/me", headers=headers)

    assert response.status_code == 401
    assert response.json()["detail"]["login_url"] == f"{API}/auth/login"
    assert response.json()["detail"]["message"] == "Não autenticado"
    assert response.headers["www-authenticate"] == "Bearer"


@pytest.mark.asyncio
async def test_wrong_role_gets_403_with_home(client, employee_headers):
    response = await client.get(f"{API}/admin/companies", headers=employee_headers)

    assert response.status_code == 403
    assert response.json()["detail"]["home_url"] == "/"


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "headers_fixture,home",
    [
        ("admin_headers", "/admin"),
        ("manager_headers", "/manager/dashboard"),
        ("employee_headers", "/employee/dashboard"),
    ],
)
async def test_home_by_role(client, request, headers_fixture, home):
    response = await client.get(f"{API}/me/home", headers=request.getfixturevalue(headers_fixture))
    assert response.status_code == 200
    assert response.json()["home"] == home


# -------- admin: CRUD y paginación --------
@pytest.mark.asyncio
async def test_list_companies_page(client, admin_headers):
    response = await client.get(f"{API}/admin/companies", headers=admin_headers)

    body = response.json()
    assert response.status_code == 200
    assert body["total"] == 2
    assert body["totalPages"] == 1
    assert body["data"][0]["id"] == "company-1"


@pytest.mark.asyncio
async def test_pagination_params(client, admin_headers):
    response = await client.get(
        f"{API}/admin/questions", params={"page": 2, "limit": 2}, headers=admin_headers
    )
    body = response.json()
    assert [q["id"] for q in body["data"]] == ["q-3", "q-4"]
    assert body["totalPages"] == 3

    invalid = await client.get(f"{API}/admin/questions", params={"page": 0}, headers=admin_headers)
    assert invalid.status_code == 400


@pytest.mark.asyncio
async def test_create_company_and_get(client, admin_headers):
    created = await client.post(f"{API}/admin/companies", headers=admin_headers, json={
        "name": "Nova Ltda",
        "cnpj": "11.111.111/0001-11",
        "sector": "Varejo",
        "employeeCount": 12,
    })
    assert created.status_code == 201
    company = created.json()
    assert company["isActive"] is True

    fetched = await client.get(f"{API}/admin/companies/{company['id']}", headers=admin_headers)
    assert fetched.json()["employeeCount"] == 12


@pytest.mark.asyncio
async def test_duplicate_employee_email(client, admin_headers):
    response = await client.post(f"{API}/admin/employees", headers=admin_headers, json={
        "name": "Maria Copia",
        "email": "maria.silva@techsolutions.com",
        "companyId": "company-1",
        "sector": "Tecnologia",
        "position": "Dev",
    })
    assert response.status_code == 400
    assert response.json()["detail"] == "E-mail já cadastrado"


@pytest.mark.asyncio
async def test_unknown_employee(client, admin_headers):
    response = await client.get(f"{API}/admin/employees/emp-999", headers=admin_headers)
    assert response.status_code == 404
    assert response.json()["code"] == "NOT_FOUND"


@pytest.mark.asyncio
async def test_delete_question_is_soft(client, admin_headers, store):
    response = await client.delete(f"{API}/admin/questions/q-4", headers=admin_headers)

    assert response.status_code == 204
    assert store.questions["q-4"].is_active is False
    fetched = await client.get(f"{API}/admin/questions/q-4", headers=admin_headers)
    assert fetched.json()["isActive"] is False


# -------- configuración --------
@pytest.mark.asyncio
async def test_settings_null_business_hours_is_400(client, admin_headers, store):
    response = await client.patch(
        f"{API}/admin/settings/company-1", headers=admin_headers, json={"businessHours": None}
    )

    assert response.status_code == 400
    assert response.json()["code"] == "VALIDATION_ERROR"
    assert store.settings["company-1"].business_hours.start == "09:00"


@pytest.mark.asyncio
async def test_settings_within_hours_naive_at_is_utc(client, admin_headers):
    response = await client.get(
        f"{API}/admin/settings/company-1/within-hours",
        params={"at": "2025-01-15T12:00:00"},
        headers=admin_headers,
    )
    assert response.status_code == 200
    assert response.json()["withinBusinessHours"] is True


# -------- importación CSV --------
@pytest.mark.asyncio
async def test_import_template(client, admin_headers):
    response = await client.get(f"{API}/admin/employees/import/template", headers=admin_headers)

    assert response.status_code == 200
    assert response.headers["content-type"].startswith("text/csv")
    assert response.text.startswith("name,email,sector,position")


@pytest.mark.asyncio
async def test_import_csv_upload(client, admin_headers, store):
    content = (
        "name,email,sector,position\n"
        "Lucas Souza,lucas@techsolutions.com,Vendas,Vendedor\n"
        "Sem Email,,Vendas,Vendedor\n"
    ).encode("utf-8")

    response = await client.post(
        f"{API}/admin/employees/import",
        params={"companyId": "company-1"},
        files={"file": ("funcionarios.csv", content, "text/csv")},
        headers=admin_headers,
    )

    body = response.json()
    assert response.status_code == 200
    assert body["success"] == 1
    assert body["errors"][0]["row"] == 2
    assert any(e.email == "lucas@techsolutions.com" for e in store.employees.values())


@pytest.mark.asyncio
async def test_import_empty_csv(client, admin_headers):
    response = await client.post(
        f"{API}/admin/employees/import",
        params={"companyId": "company-1"},
        files={"file": ("vazio.csv", b"name,email,sector,position\n", "text/csv")},
        headers=admin_headers,
    )
    assert response.status_code == 400
    assert response.json()["detail"] == "Arquivo CSV vazio"


# -------- relatorios --------
@pytest.mark.asyncio
async def test_manager_sees_only_own_company_reports(client, manager_headers):
    listing = await client.get(f"{API}/reports", params={"companyId": "company-2"}, headers=manager_headers)
    assert {r["companyId"] for r in listing.json()["data"]} == {"company-1"}

    other = await client.get(f"{API}/reports/report-3", headers=manager_headers)
    assert other.status_code == 403

    generate = await client.post(f"{API}/reports/generate", headers=manager_headers, json={
        "surveyId": "survey-1", "cycleId": "cycle-1",
    })
    assert generate.status_code == 403


@pytest.mark.asyncio
async def test_employee_cannot_see_reports(client, employee_headers):
    response = await client.get(f"{API}/reports", headers=employee_headers)
    assert response.status_code == 403


@pytest.mark.asyncio
async def test_admin_generates_report(client, admin_headers):
    response = await client.post(f"{API}/reports/generate", headers=admin_headers, json={
        "surveyId": "survey-1", "cycleId": "cycle-1",
    })
    assert response.status_code == 202
    assert response.json()["status"] == "generating"

    # la tarea en segundo plano termina antes de que el cliente reciba la respuesta
    report = await client.get(f"{API}/reports/{response.json()['id']}", headers=admin_headers)
    assert report.json()["status"] == "ready"


@pytest.mark.asyncio
async def test_export_csv_download(client, manager_headers):
    response = await client.get(f"{API}/reports/report-1/export/csv", headers=manager_headers)

    assert response.status_code == 200
    assert response.headers["content-type"].startswith("text/csv")
    assert 'filename="Pesquisa de Clima Organizacional Q1 2025 - Geral.csv"' in response.headers[
        "content-disposition"
    ]
    assert response.text.split("\n")[1] == "TI,20,6.5,7.2,5.8"


@pytest.mark.asyncio
async def test_manager_reports_by_sector(client, manager_headers):
    response = await client.get(f"{API}/manager/reports", headers=manager_headers)
    assert response.json()["total"] == 1  # sector Tecnologia: solo el general


# -------- funcionario --------
@pytest.mark.asyncio
async def test_employee_dashboard(client, employee_headers):
    response = await client.get(f"{API}/employee/dashboard", headers=employee_headers)

    body = response.json()
    assert response.status_code == 200
    assert body["totalPoints"] == 450
    assert body["level"] == 3


@pytest.mark.asyncio
async def test_employee_submits_survey(client, employee_headers, store, allow_outside_hours):
    form = await client.get(f"{API}/employee/surveys/survey-1", headers=employee_headers)
    assert form.json()["withinBusinessHours"] is True
    assert len(form.json()["questions"]) == 5

    response = await client.post(f"{API}/employee/surveys/survey-1", headers=employee_headers, json={
        "answers": [
            {"questionId": "q-1", "value": 4},
            {"questionId": "q-5", "value": "Raramente"},
        ],
    })

    assert response.status_code == 201
    assert response.json()["sector"] == "Tecnologia"
    assert store.cycles["cycle-1"].response_count == 46


@pytest.mark.asyncio
async def test_quiz_hides_correct_answers(client, employee_headers):
    response = await client.get(f"{API}/employee/videos/vid-1/quiz", headers=employee_headers)

    assert response.status_code == 200
    questions = response.json()["questions"]
    assert len(questions) == 2
    assert all("correctAnswer" not in q for q in questions)


@pytest.mark.asyncio
async def test_quiz_submit_and_progress(client, employee_headers):
    result = await client.post(f"{API}/employee/videos/vid-1/quiz", headers=employee_headers, json={
        "answers": {"qq-1": 1, "qq-2": 0},
    })
    assert result.json()["passed"] is True

    progress = await client.get(f"{API}/employee/gamification", headers=employee_headers)
    assert progress.json()["totalPoints"] == 470


@pytest.mark.asyncio
async def test_admin_cannot_use_employee_routes(client, admin_headers):
    response = await client.get(f"{API}/employee/dashboard", headers=admin_headers)
    assert response.status_code == 403
