from sqlalchemy import Column, String, DateTime, ForeignKey, CheckConstraint
from sqlalchemy.orm import relationship, validates

from professor_aid.database import Base, utcnow
from professor_aid.exceptions import ConstraintViolation

PERIODOS = ("matutino", "vespertino", "noturno")


class Turma(Base):
    __tablename__ = "turmas"

    id = Column(String, primary_key=True, index=True)
    professor_id = Column(String, ForeignKey("profiles.id", ondelete="CASCADE"), nullable=False, index=True)
    nome = Column(String, nullable=False)
    ano_letivo = Column(String, nullable=False)   # free text, e.g. "2025"
    periodo = Column(String, nullable=True)       # matutino | vespertino | noturno
    descricao = Column(String, nullable=True)
    created_at = Column(DateTime, default=utcnow, nullable=False)
    updated_at = Column(DateTime, default=utcnow, nullable=False)

    professor = relationship("Profile", back_populates="turmas")
    atividades = relationship(
        "Atividade",
        back_populates="turma",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )

    __table_args__ = (
        CheckConstraint(
            "periodo IN ('matutino', 'vespertino', 'noturno')",
            name="turmas_periodo_check",
        ),
    )

    @validates("periodo")
    def _check_periodo(self, key, value):
        if value is not None and value not in PERIODOS:
            raise ConstraintViolation(
                "turmas_periodo_check",
                f"Invalid periodo {value!r}, expected one of {', '.join(PERIODOS)}",
                {"field": key, "value": value},
            )
        return value
