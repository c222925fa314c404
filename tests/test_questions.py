import pytest

from mhsurvey.core.exceptions import ValidationError
from mhsurvey.models.question import QuestionType
from mhsurvey.services.questions import QuestionService, validate_question_shape

SCALE = {
    "text": "Como está seu sono?",
    "type": "scale",
    "category": "stress",
    "scale_min": 1,
    "scale_max": 5,
    "scale_labels": {"min": "Ruim", "max": "Ótimo"},
}


@pytest.mark.parametrize(
    "data,message",
    [
        ({**SCALE, "text": "  "}, "O texto da pergunta é obrigatório"),
        ({**SCALE, "type": None}, "O tipo da pergunta é obrigatório"),
        ({**SCALE, "category": ""}, "A categoria é obrigatória"),
        ({**SCALE, "type": "ranking"}, "Tipo de pergunta inválido"),
        ({**SCALE, "scale_max": None}, "Perguntas tipo escala devem ter valores mínimo e máximo"),
        ({**SCALE, "scale_min": 5, "scale_max": 5}, "O valor mínimo deve ser menor que o máximo"),
        ({**SCALE, "scale_labels": {"min": "Ruim"}}, "Perguntas tipo escala devem ter rótulos para mínimo e máximo"),
        (
            {"text": "Qual?", "type": "multiple_choice", "category": "geral", "options": ["Só uma"]},
            "Perguntas de múltipla escolha devem ter pelo menos 2 opções",
        ),
    ],
)
def test_shape_validation_errors(data, message):
    with pytest.raises(ValidationError) as exc:
        validate_question_shape(data)
    assert exc.value.message == message


@pytest.mark.parametrize(
    "data",
    [
        SCALE,
        {"text": "Gosta do time?", "type": "yes_no", "category": "satisfaction"},
        {"text": "Comente", "type": "text", "category": "general"},
        {"text": "Qual?", "type": "multiple_choice", "category": "geral", "options": ["A", "B"]},
    ],
)
def test_valid_shapes(data):
    validate_question_shape(data)


@pytest.mark.asyncio
async def test_create_invalid_question_does_not_mutate(store):
    service = QuestionService(store)
    before = dict(store.questions)
    with pytest.raises(ValidationError):
        await service.create({**SCALE, "scale_min": 9, "scale_max": 2})
    assert store.questions == before


@pytest.mark.asyncio
async def test_update_validates_merged_record(store):
    service = QuestionService(store)
    with pytest.raises(ValidationError):
        await service.update("q-1", {"scale_min": 20})
    assert store.questions["q-1"].scale_min == 1

    updated = await service.update("q-1", {"scale_max": 7})
    assert updated.scale_max == 7
    assert updated.type == QuestionType.SCALE


@pytest.mark.asyncio
async def test_change_type_requires_new_shape(store):
    service = QuestionService(store)
    # q-2 es yes_no: pasar a multiple_choice exige opciones
    with pytest.raises(ValidationError):
        await service.update("q-2", {"type": "multiple_choice"})
    updated = await service.update("q-2", {"type": "multiple_choice", "options": ["Sim", "Não", "Talvez"]})
    assert updated.type == QuestionType.MULTIPLE_CHOICE


@pytest.mark.asyncio
async def test_queries(store):
    service = QuestionService(store)
    await service.delete("q-3")

    stress = await service.get_by_category("stress")
    scale = await service.get_by_type(QuestionType.SCALE)
    active = await service.get_active()

    assert [q.id for q in stress.data] == ["q-1"]
    assert [q.id for q in scale.data] == ["q-1"]
    assert "q-3" not in [q.id for q in active.data]
    assert await service.get_categories() == sorted({q.category for q in store.questions.values()})
