# mhsurvey/db/seed.py
"""
Datos de ejemplo cargados al construir el store.

CREDENCIALES DE PRUEBA (solo para pruebas de interfaz):
- admin@empresa.com / admin123        -> admin
- gerente@empresa.com / gerente123    -> manager (Tecnologia)
- funcionario@empresa.com / func123   -> employee (Tecnologia)
"""
from __future__ import annotations

from datetime import datetime, timezone

from mhsurvey.db.store import Account, MemoryStore
from mhsurvey.models.base import utcnow
from mhsurvey.models.company import BusinessHours, Company
from mhsurvey.models.employee import Employee
from mhsurvey.models.payment import Payment, PaymentStatus
from mhsurvey.models.question import Question, QuestionType, ScaleLabels
from mhsurvey.models.report import (
    Alert, ChartData, Insight, Report, ReportData, ReportStatus, SectorReport,
)
from mhsurvey.models.settings import SystemSettings
from mhsurvey.models.survey import Survey, SurveyCycle, SurveyStatus
from mhsurvey.models.user import Role, User
from mhsurvey.models.video import GamificationProgress, Quiz, QuizQuestion, Video


def _dt(value: str) -> datetime:
    return datetime.fromisoformat(value.replace("Z", "+00:00")).astimezone(timezone.utc)


def _accounts() -> list[Account]:
    now = utcnow()
    return [
        Account(
            password="admin123",
            user=User(
                id="1", email="admin@empresa.com", name="Administrador Sistema",
                role=Role.ADMIN, company_id="company-1",
                created_at=now, updated_at=now,
            ),
        ),
        Account(
            password="gerente123",
            user=User(
                id="2", email="gerente@empresa.com", name="João Silva",
                role=Role.MANAGER, company_id="company-1",
                sector="Tecnologia", position="Gerente de TI",
                created_at=now, updated_at=now,
            ),
        ),
        Account(
            password="func123",
            user=User(
                id="3", email="funcionario@empresa.com", name="Maria Santos",
                role=Role.EMPLOYEE, company_id="company-1",
                sector="Tecnologia", position="Desenvolvedora",
                created_at=now, updated_at=now,
            ),
        ),
    ]


def _companies() -> list[Company]:
    return [
        Company(
            id="company-1", name="Tech Solutions Ltda", cnpj="12.345.678/0001-90",
            sector="Tecnologia", employee_count=150,
            business_hours=BusinessHours(start="09:00", end="18:00", timezone="America/Sao_Paulo"),
            created_at=_dt("2024-01-15T10:00:00Z"), updated_at=_dt("2024-01-15T10:00:00Z"),
        ),
        Company(
            id="company-2", name="Consultoria Empresarial S.A.", cnpj="98.765.432/0001-10",
            sector="Consultoria", employee_count=80,
            business_hours=BusinessHours(start="08:00", end="17:00", timezone="America/Sao_Paulo"),
            created_at=_dt("2024-02-10T14:30:00Z"), updated_at=_dt("2024-02-10T14:30:00Z"),
        ),
    ]


def _employees() -> list[Employee]:
    rows = [
        ("emp-1", "Maria Silva", "maria.silva@techsolutions.com", "Tecnologia", "Desenvolvedora Senior", "2024-01-20T10:00:00Z"),
        ("emp-2", "João Santos", "joao.santos@techsolutions.com", "Recursos Humanos", "Analista de RH", "2024-01-21T14:30:00Z"),
        ("emp-3", "Ana Oliveira", "ana.oliveira@techsolutions.com", "Tecnologia", "Gerente de Projetos", "2024-01-22T09:15:00Z"),
    ]
    return [
        Employee(
            id=i, name=n, email=e, company_id="company-1", sector=s, position=p,
            created_at=_dt(c), updated_at=_dt(c),
        )
        for i, n, e, s, p, c in rows
    ]


def _questions() -> list[Question]:
    return [
        Question(
            id="q-1", text="Como você avalia seu nível de estresse no trabalho?",
            type=QuestionType.SCALE, scale_min=1, scale_max=10,
            scale_labels=ScaleLabels(min="Muito baixo", max="Muito alto"),
            category="stress",
            created_at=_dt("2024-01-15T10:00:00Z"), updated_at=_dt("2024-01-15T10:00:00Z"),
        ),
        Question(
            id="q-2", text="Você se sente satisfeito com seu ambiente de trabalho?",
            type=QuestionType.YES_NO, category="satisfaction",
            created_at=_dt("2024-01-15T10:30:00Z"), updated_at=_dt("2024-01-15T10:30:00Z"),
        ),
        Question(
            id="q-3", text="Qual aspecto do trabalho mais te afeta negativamente?",
            type=QuestionType.MULTIPLE_CHOICE,
            options=["Carga de trabalho", "Relacionamento com colegas",
                     "Falta de reconhecimento", "Pressão por resultados", "Outro"],
            category="stress",
            created_at=_dt("2024-01-15T11:00:00Z"), updated_at=_dt("2024-01-15T11:00:00Z"),
        ),
        Question(
            id="q-4", text="Descreva como você se sente em relação ao seu trabalho atualmente:",
            type=QuestionType.TEXT, category="general",
            created_at=_dt("2024-01-15T11:30:00Z"), updated_at=_dt("2024-01-15T11:30:00Z"),
        ),
        Question(
            id="q-5", text="Com que frequência você se sente exausto ao final do dia?",
            type=QuestionType.MULTIPLE_CHOICE,
            options=["Nunca", "Raramente", "Às vezes", "Frequentemente", "Sempre"],
            category="burnout",
            created_at=_dt("2024-01-16T09:00:00Z"), updated_at=_dt("2024-01-16T09:00:00Z"),
        ),
    ]


def _surveys() -> list[Survey]:
    return [
        Survey(
            id="survey-1", title="Pesquisa de Clima Organizacional Q1 2025",
            description="Avaliação trimestral sobre satisfação e bem-estar dos colaboradores",
            company_id="company-1", questions=["q-1", "q-2", "q-3", "q-4", "q-5"],
            status=SurveyStatus.ACTIVE,
            start_date=_dt("2025-01-01T00:00:00Z"), end_date=_dt("2025-01-31T23:59:59Z"),
            reminder_frequency=7, min_responses=10,
            created_at=_dt("2024-12-15T00:00:00Z"), updated_at=_dt("2024-12-15T00:00:00Z"),
        ),
        Survey(
            id="survey-2", title="Avaliação de Estresse e Burnout",
            description="Pesquisa focada em identificar sinais de esgotamento profissional",
            company_id="company-1", questions=["q-1", "q-3", "q-5"],
            status=SurveyStatus.DRAFT,
            start_date=_dt("2025-02-01T00:00:00Z"), end_date=_dt("2025-02-28T23:59:59Z"),
            reminder_frequency=7, min_responses=15,
            created_at=_dt("2024-12-20T00:00:00Z"), updated_at=_dt("2024-12-20T00:00:00Z"),
        ),
        Survey(
            id="survey-3", title="Pesquisa de Satisfação Q4 2024",
            description="Avaliação sobre satisfação geral com trabalho remoto",
            company_id="company-2", questions=["q-2", "q-4"],
            status=SurveyStatus.CLOSED,
            start_date=_dt("2024-10-01T00:00:00Z"), end_date=_dt("2024-10-31T23:59:59Z"),
            reminder_frequency=7, min_responses=20,
            created_at=_dt("2024-09-15T00:00:00Z"), updated_at=_dt("2024-11-01T00:00:00Z"),
        ),
    ]


def _cycles() -> list[SurveyCycle]:
    return [
        SurveyCycle(
            id="cycle-1", survey_id="survey-1", company_id="company-1",
            start_date=_dt("2025-01-01T00:00:00Z"), end_date=_dt("2025-01-31T23:59:59Z"),
            status=SurveyStatus.ACTIVE, response_count=45, target_count=100,
            created_at=_dt("2025-01-01T00:00:00Z"), updated_at=_dt("2025-01-01T00:00:00Z"),
        ),
        SurveyCycle(
            id="cycle-2", survey_id="survey-3", company_id="company-2",
            start_date=_dt("2024-10-01T00:00:00Z"), end_date=_dt("2024-10-31T23:59:59Z"),
            status=SurveyStatus.CLOSED, response_count=78, target_count=80,
            created_at=_dt("2024-10-01T00:00:00Z"), updated_at=_dt("2024-11-01T00:00:00Z"),
        ),
    ]


def _sector(name: str, count: int, stress: float, satisfaction: float, burnout: float,
            alerts: list[Alert] | None = None) -> SectorReport:
    return SectorReport(
        sector=name, response_count=count,
        average_scores={"stress": stress, "satisfaction": satisfaction, "burnout": burnout},
        alerts=alerts or [],
    )


def _reports() -> list[Report]:
    ti = _sector("TI", 20, 6.5, 7.2, 5.8, [
        Alert(type="stress", level="warning", message="Nível de estresse acima da média"),
    ])
    general = Report(
        id="report-1", survey_id="survey-1", cycle_id="cycle-1", company_id="company-1",
        title="Pesquisa de Clima Organizacional Q1 2025 - Geral",
        status=ReportStatus.READY,
        data=ReportData(
            total_responses=45, response_rate=45,
            sectors=[
                ti,
                _sector("RH", 15, 5.2, 8.1, 4.3),
                _sector("Financeiro", 10, 7.8, 6.5, 7.2, [
                    Alert(type="burnout", level="critical", message="Alto risco de burnout detectado"),
                ]),
            ],
            insights=[
                Insight(category="stress", level="high",
                        message="Setor Financeiro apresenta níveis críticos de estresse",
                        affected_sectors=["Financeiro"]),
                Insight(category="satisfaction", level="medium",
                        message="Taxa de satisfação geral está dentro do esperado",
                        affected_sectors=["TI", "RH"]),
            ],
            charts=[
                ChartData(type="bar", title="Índice de Estresse por Setor", data={
                    "labels": ["TI", "RH", "Financeiro"],
                    "datasets": [{"label": "Estresse", "data": [6.5, 5.2, 7.8]}],
                }),
            ],
        ),
        generated_at=_dt("2025-01-20T00:00:00Z"),
        created_at=_dt("2025-01-20T00:00:00Z"), updated_at=_dt("2025-01-20T00:00:00Z"),
    )
    sector_ti = Report(
        id="report-2", survey_id="survey-1", cycle_id="cycle-1", company_id="company-1",
        sector="TI", title="Pesquisa de Clima Organizacional Q1 2025 - TI",
        status=ReportStatus.READY,
        data=ReportData(
            total_responses=20, response_rate=80, sectors=[ti],
            insights=[
                Insight(category="stress", level="medium",
                        message="Equipe de TI necessita atenção em gestão de estresse",
                        affected_sectors=["TI"]),
            ],
        ),
        generated_at=_dt("2025-01-20T00:00:00Z"),
        created_at=_dt("2025-01-20T00:00:00Z"), updated_at=_dt("2025-01-20T00:00:00Z"),
    )
    company_2 = Report(
        id="report-3", survey_id="survey-3", cycle_id="cycle-2", company_id="company-2",
        title="Pesquisa de Satisfação Q4 2024 - Geral",
        status=ReportStatus.READY,
        data=ReportData(
            total_responses=78, response_rate=97.5,
            sectors=[
                _sector("Vendas", 40, 8.2, 6.8, 7.5, [
                    Alert(type="burnout", level="critical", message="Risco crítico de burnout"),
                ]),
                _sector("Atendimento", 38, 7.5, 7.0, 6.8, [
                    Alert(type="stress", level="warning", message="Nível elevado de estresse"),
                ]),
            ],
            insights=[
                Insight(category="burnout", level="critical",
                        message="Intervenção urgente necessária no setor de Vendas",
                        affected_sectors=["Vendas"]),
            ],
        ),
        generated_at=_dt("2024-11-01T00:00:00Z"),
        created_at=_dt("2024-11-01T00:00:00Z"), updated_at=_dt("2024-11-01T00:00:00Z"),
    )
    return [general, sector_ti, company_2]


def _videos() -> list[Video]:
    return [
        Video(
            id="vid-1", title="Introdução à Saúde Mental no Trabalho",
            description="Vídeo introdutório sobre a importância da saúde mental no ambiente corporativo",
            url="https://www.youtube.com/watch?v=dQw4w9WgXcQ", duration=600,
            thumbnail="https://picsum.photos/seed/video1/400/225",
            category="Introdução", quiz_id="quiz-1", points=30,
            created_at=_dt("2024-01-15T10:00:00Z"), updated_at=_dt("2024-01-15T10:00:00Z"),
        ),
        Video(
            id="vid-2", title="Gerenciando o Estresse",
            description="Técnicas práticas para lidar com o estresse no dia a dia",
            url="https://www.youtube.com/watch?v=dQw4w9WgXcQ", duration=900,
            thumbnail="https://picsum.photos/seed/video2/400/225",
            category="Bem-estar", quiz_id="quiz-2", points=30,
            created_at=_dt("2024-01-16T10:00:00Z"), updated_at=_dt("2024-01-16T10:00:00Z"),
        ),
        Video(
            id="vid-3", title="Prevenção ao Burnout",
            description="Como identificar e prevenir o esgotamento profissional",
            url="https://www.youtube.com/watch?v=dQw4w9WgXcQ", duration=720,
            thumbnail="https://picsum.photos/seed/video3/400/225",
            category="Prevenção", points=35,
            created_at=_dt("2024-01-17T10:00:00Z"), updated_at=_dt("2024-01-17T10:00:00Z"),
        ),
    ]


def _quizzes() -> list[Quiz]:
    now = utcnow()
    return [
        Quiz(
            id="quiz-1", video_id="vid-1", passing_score=70,
            questions=[
                QuizQuestion(id="qq-1", question="O que é saúde mental?",
                             options=["Ausência de doença", "Estado de bem-estar", "Apenas felicidade"],
                             correct_answer=1),
                QuizQuestion(id="qq-2", question="Saúde mental afeta a produtividade?",
                             options=["Sim", "Não"], correct_answer=0),
            ],
            created_at=now, updated_at=now,
        ),
        Quiz(
            id="quiz-2", video_id="vid-2", passing_score=70,
            questions=[
                QuizQuestion(id="qq-3", question="Qual técnica ajuda a reduzir o estresse?",
                             options=["Respiração consciente", "Trabalhar sem pausas", "Dormir menos"],
                             correct_answer=0),
            ],
            created_at=now, updated_at=now,
        ),
    ]


def _payments() -> list[Payment]:
    return [
        Payment(
            id="pay-1", company_id="company-1", amount=2500.00, status=PaymentStatus.PAID,
            due_date=_dt("2024-11-15T00:00:00Z"), paid_at=_dt("2024-11-10T14:30:00Z"),
            description="Mensalidade - Novembro 2024",
            created_at=_dt("2024-10-15T10:00:00Z"), updated_at=_dt("2024-11-10T14:30:00Z"),
        ),
        Payment(
            id="pay-2", company_id="company-1", amount=2500.00, status=PaymentStatus.PENDING,
            due_date=_dt("2024-12-15T00:00:00Z"), description="Mensalidade - Dezembro 2024",
            created_at=_dt("2024-11-15T10:00:00Z"), updated_at=_dt("2024-11-15T10:00:00Z"),
        ),
        Payment(
            id="pay-3", company_id="company-2", amount=1800.00, status=PaymentStatus.OVERDUE,
            due_date=_dt("2024-10-15T00:00:00Z"), description="Mensalidade - Outubro 2024",
            created_at=_dt("2024-09-15T10:00:00Z"), updated_at=_dt("2024-10-16T10:00:00Z"),
        ),
    ]


def seed_store(store: MemoryStore) -> None:
    for acc in _accounts():
        store.accounts[acc.user.email.lower()] = acc

    for collection, items in (
        (store.companies, _companies()),
        (store.employees, _employees()),
        (store.questions, _questions()),
        (store.surveys, _surveys()),
        (store.cycles, _cycles()),
        (store.reports, _reports()),
        (store.videos, _videos()),
        (store.quizzes, _quizzes()),
        (store.payments, _payments()),
    ):
        for item in items:
            collection[item.id] = item

    now = utcnow()
    for company in store.companies.values():
        store.settings[company.id] = SystemSettings(
            id=f"settings-{company.id}",
            company_id=company.id,
            business_hours=company.business_hours or BusinessHours(start="08:00", end="18:00"),
            created_at=now, updated_at=now,
        )

    store.progress["3"] = GamificationProgress(
        user_id="3", total_points=450, videos_watched=12,
        quizzes_completed=8, surveys_completed=5, level=3,
    )
