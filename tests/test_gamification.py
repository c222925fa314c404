import pytest

from mhsurvey.services.gamification import (
    ActivityKind,
    GamificationService,
    level_for,
    next_level,
)


@pytest.mark.parametrize(
    "points,level",
    [(0, 1), (100, 1), (101, 2), (250, 2), (251, 3), (500, 3), (501, 4), (1001, 5), (5000, 6)],
)
def test_level_boundaries(points, level):
    assert level_for(points).level == level


def test_next_level():
    assert next_level(450).title == "Especialista"
    assert next_level(2001) is None


@pytest.mark.asyncio
async def test_new_user_starts_at_level_one(store):
    progress = await GamificationService(store).get_progress("novo")
    assert progress.total_points == 0
    assert progress.level == 1
    assert progress.badges == []


@pytest.mark.asyncio
async def test_level_up_grants_badge(store):
    service = GamificationService(store)
    await service.record_activity("3", ActivityKind.SURVEY)  # 500
    progress = await service.record_activity("3", ActivityKind.VIDEO)  # 530

    assert progress.total_points == 530
    assert progress.level == 4
    assert [b.id for b in progress.badges] == ["level-4"]


def test_big_jump_grants_every_level_crossed(store):
    progress = GamificationService(store).award("novo", ActivityKind.VIDEO, points=600)

    assert progress.level == 4
    assert [b.id for b in progress.badges] == ["level-2", "level-3", "level-4"]
    assert progress.videos_watched == 1


@pytest.mark.asyncio
async def test_ranking_orders_by_points(store):
    service = GamificationService(store)
    service.award("2", ActivityKind.VIDEO, points=900)
    service.award("1", ActivityKind.QUIZ)

    ranking = await service.ranking("company-1")

    assert [(r.rank, r.user_id, r.points) for r in ranking] == [
        (1, "2", 900),
        (2, "3", 450),
        (3, "1", 20),
    ]
    assert ranking[0].name == "João Silva"
    assert len(await service.ranking(limit=1)) == 1
