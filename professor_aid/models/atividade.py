from sqlalchemy import Column, String, Date, DateTime, ForeignKey, CheckConstraint
from sqlalchemy.orm import relationship, validates

from professor_aid.database import Base, utcnow
from professor_aid.exceptions import ConstraintViolation

TIPOS = ("tarefa", "prova", "projeto", "exercicio", "trabalho")
STATUSES = ("ativa", "finalizada", "cancelada")


class Atividade(Base):
    __tablename__ = "atividades"

    id = Column(String, primary_key=True, index=True)
    turma_id = Column(String, ForeignKey("turmas.id", ondelete="CASCADE"), nullable=False, index=True)
    titulo = Column(String, nullable=False)
    descricao = Column(String, nullable=True)
    data_entrega = Column(Date, nullable=True)
    tipo = Column(String, nullable=True)
    status = Column(String, nullable=True, default="ativa")
    created_at = Column(DateTime, default=utcnow, nullable=False)
    updated_at = Column(DateTime, default=utcnow, nullable=False)

    turma = relationship("Turma", back_populates="atividades")

    __table_args__ = (
        CheckConstraint(
            "tipo IN ('tarefa', 'prova', 'projeto', 'exercicio', 'trabalho')",
            name="atividades_tipo_check",
        ),
        CheckConstraint(
            "status IN ('ativa', 'finalizada', 'cancelada')",
            name="atividades_status_check",
        ),
    )

    @validates("tipo")
    def _check_tipo(self, key, value):
        return _check_enum("atividades_tipo_check", key, value, TIPOS)

    @validates("status")
    def _check_status(self, key, value):
        return _check_enum("atividades_status_check", key, value, STATUSES)


def _check_enum(constraint, key, value, allowed):
    if value is not None and value not in allowed:
        raise ConstraintViolation(
            constraint,
            f"Invalid {key} {value!r}, expected one of {', '.join(allowed)}",
            {"field": key, "value": value},
        )
    return value
