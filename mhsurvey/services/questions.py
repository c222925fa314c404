# mhsurvey/services/questions.py
"""
Banco de preguntas.

La forma de una pregunta depende de su tipo y se valida tanto al crear como
al actualizar (sobre el registro ya combinado):

- multiple_choice: al menos 2 opciones
- scale: scale_min < scale_max y etiquetas para mínimo y máximo
- yes_no / text: sin campos adicionales
"""
from __future__ import annotations

from typing import Any, Dict, List, Optional

from mhsurvey.core.exceptions import ValidationError
from mhsurvey.models.question import Question, QuestionType
from mhsurvey.services.base import DeletePolicy, MockCrudService, Page, PaginationParams, paginate


def _label(labels: Any, key: str) -> Optional[str]:
    if labels is None:
        return None
    if isinstance(labels, dict):
        return labels.get(key)
    return getattr(labels, key, None)


def validate_question_shape(data: Dict[str, Any]) -> None:
    if not (data.get("text") or "").strip():
        raise ValidationError("O texto da pergunta é obrigatório")

    if not data.get("type"):
        raise ValidationError("O tipo da pergunta é obrigatório")

    if not (data.get("category") or "").strip():
        raise ValidationError("A categoria é obrigatória")

    try:
        qtype = QuestionType(data["type"])
    except ValueError:
        raise ValidationError("Tipo de pergunta inválido") from None

    if qtype == QuestionType.MULTIPLE_CHOICE:
        options = [o for o in (data.get("options") or []) if str(o).strip()]
        if len(options) < 2:
            raise ValidationError("Perguntas de múltipla escolha devem ter pelo menos 2 opções")

    elif qtype == QuestionType.SCALE:
        smin, smax = data.get("scale_min"), data.get("scale_max")
        if smin is None or smax is None:
            raise ValidationError("Perguntas tipo escala devem ter valores mínimo e máximo")
        if smin >= smax:
            raise ValidationError("O valor mínimo deve ser menor que o máximo")
        labels = data.get("scale_labels")
        if not _label(labels, "min") or not _label(labels, "max"):
            raise ValidationError("Perguntas tipo escala devem ter rótulos para mínimo e máximo")


class QuestionService(MockCrudService[Question]):
    model = Question
    collection_name = "questions"
    not_found_message = "Pergunta não encontrada"
    delete_policy = DeletePolicy.SOFT

    def validate_create(self, data: Dict[str, Any]) -> None:
        validate_question_shape(data)

    def validate_update(self, current: Question, data: Dict[str, Any]) -> None:
        # Se valida el registro resultante, no solo el parcial
        validate_question_shape({**current.model_dump(), **data})

    async def get_active(self, pagination: Optional[PaginationParams] = None) -> Page[Question]:
        await self.delay()
        return paginate([q for q in self.items.values() if q.is_active], pagination)

    async def get_by_category(
        self, category: str, pagination: Optional[PaginationParams] = None
    ) -> Page[Question]:
        await self.delay()
        return paginate(
            [q for q in self.items.values() if q.category == category and q.is_active],
            pagination,
        )

    async def get_by_type(
        self, qtype: QuestionType, pagination: Optional[PaginationParams] = None
    ) -> Page[Question]:
        await self.delay()
        return paginate(
            [q for q in self.items.values() if q.type == qtype and q.is_active],
            pagination,
        )

    async def get_categories(self) -> List[str]:
        await self.delay()
        return sorted({q.category for q in self.items.values()})
