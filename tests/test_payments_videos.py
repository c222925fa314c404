import pytest

from mhsurvey.core.exceptions import NotFoundError, ValidationError
from mhsurvey.models.payment import PaymentStatus
from mhsurvey.services.payments import PaymentService
from mhsurvey.services.videos import VideoService


# -------- pagos --------
@pytest.mark.asyncio
async def test_delete_cancels_payment(store):
    service = PaymentService(store)
    await service.delete("pay-2")

    assert store.payments["pay-2"].status == PaymentStatus.CANCELLED
    with pytest.raises(ValidationError):
        await service.mark_as_paid("pay-2")
    with pytest.raises(ValidationError):
        await service.update("pay-2", {"status": "pending"})


@pytest.mark.asyncio
async def test_mark_as_paid(store):
    paid = await PaymentService(store).mark_as_paid("pay-3")
    assert paid.status == PaymentStatus.PAID
    assert paid.paid_at is not None


@pytest.mark.asyncio
async def test_payment_amount_must_be_positive(store):
    service = PaymentService(store)
    with pytest.raises(ValidationError):
        await service.create({"company_id": "company-1", "amount": 0, "due_date": "2025-01-15T00:00:00Z"})

    created = await service.create({"companyId": "company-1", "amount": 99.9, "dueDate": "2025-01-15T00:00:00Z"})
    assert created.status == PaymentStatus.PENDING


@pytest.mark.asyncio
async def test_payment_stats_and_filters(store):
    service = PaymentService(store)
    stats = await service.stats()

    assert (stats.total, stats.paid, stats.pending, stats.overdue) == (3, 1, 1, 1)
    assert stats.total_amount == 6800
    assert stats.paid_amount == 2500
    assert (await service.get_by_company("company-2")).total == 1
    assert [p.id for p in (await service.get_by_status(PaymentStatus.PENDING)).data] == ["pay-2"]


@pytest.mark.asyncio
async def test_unknown_payment(store):
    with pytest.raises(NotFoundError):
        await PaymentService(store).mark_as_paid("pay-999")


# -------- videos --------
@pytest.mark.asyncio
async def test_soft_delete_video(store):
    service = VideoService(store)
    await service.delete("vid-2")

    assert store.videos["vid-2"].is_active is False
    active = await service.get_active()
    assert "vid-2" not in [v.id for v in active.data]
    with pytest.raises(NotFoundError):
        await service.mark_watched("vid-2", "3")


@pytest.mark.asyncio
async def test_video_validation(store):
    service = VideoService(store)
    with pytest.raises(ValidationError):
        await service.create({"title": "Novo", "url": "", "category": "Bem-estar"})
    with pytest.raises(ValidationError):
        await service.update("vid-1", {"duration": -5})


@pytest.mark.asyncio
async def test_quiz_pass_awards_points(store):
    result = await VideoService(store).submit_quiz("vid-1", "3", {"qq-1": 1, "qq-2": 0})

    assert result.score == 100
    assert result.passed is True
    assert result.points_awarded == 20
    assert store.progress["3"].total_points == 470
    assert store.progress["3"].quizzes_completed == 9


@pytest.mark.asyncio
async def test_quiz_fail_awards_nothing(store):
    result = await VideoService(store).submit_quiz("vid-1", "3", {"qq-1": 1})

    assert result.score == 50
    assert result.passed is False
    assert result.points_awarded == 0
    assert store.progress["3"].total_points == 450


@pytest.mark.asyncio
async def test_quiz_unknown_question(store):
    with pytest.raises(ValidationError):
        await VideoService(store).submit_quiz("vid-1", "3", {"qq-9": 0})


@pytest.mark.asyncio
async def test_video_without_quiz(store):
    with pytest.raises(NotFoundError) as exc:
        await VideoService(store).get_quiz("vid-3")
    assert exc.value.message == "Quiz não encontrado"


@pytest.mark.asyncio
async def test_mark_watched_uses_video_points(store):
    progress = await VideoService(store).mark_watched("vid-3", "3")
    assert progress.total_points == 485
    assert progress.videos_watched == 13


@pytest.mark.asyncio
async def test_video_categories(store):
    service = VideoService(store)
    assert await service.get_categories() == ["Bem-estar", "Introdução", "Prevenção"]
    assert [v.id for v in (await service.get_by_category("Prevenção")).data] == ["vid-3"]
