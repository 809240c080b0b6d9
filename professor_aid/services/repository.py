"""
Data-access boundary. Every read and write a caller makes goes through
Repository, which consults the policy engine before touching rows.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from typing import Any, Dict, Iterable, List, Optional
from uuid import uuid4

from sqlalchemy import func
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from professor_aid.exceptions import (
    AuthorizationFiltered,
    ConstraintViolation,
    DependencyMissing,
    ProfessorAidError,
    ValidationFailed,
)
from professor_aid.models import Atividade, Profile, Turma
from professor_aid.services.policies import Operation, PolicyEngine, default_engine

logger = logging.getLogger(__name__)

_PROFILE_FIELDS = {"nome", "escola", "updated_at"}
_TURMA_FIELDS = {"nome", "ano_letivo", "periodo", "descricao", "professor_id", "updated_at"}
_ATIVIDADE_FIELDS = {"titulo", "descricao", "data_entrega", "tipo", "status", "turma_id", "updated_at"}

_CONSTRAINT_PATTERNS = (
    re.compile(r'constraint "([^"]+)"'),
    re.compile(r"constraint failed: ([\w.]+)"),
)


@dataclass(frozen=True)
class CallerContext:
    """Who is asking. Passed explicitly instead of living in global state."""
    identity_id: str
    token: Optional[str] = None


def constraint_from_integrity_error(err: IntegrityError) -> ConstraintViolation:
    text = str(getattr(err, "orig", err))
    for pattern in _CONSTRAINT_PATTERNS:
        match = pattern.search(text)
        if match:
            return ConstraintViolation(match.group(1), text)
    if "FOREIGN KEY" in text.upper():
        return ConstraintViolation("foreign_key", text)
    if "NOT NULL" in text.upper():
        return ConstraintViolation("not_null", text)
    return ConstraintViolation("integrity", text)


class Repository:
    def __init__(self, db: Session, caller: CallerContext, engine: PolicyEngine | None = None):
        self.db = db
        self.caller = caller
        self.engine = engine or default_engine()

    # ------------------------------------------------------------
    # helpers
    # ------------------------------------------------------------
    def _query(self, model, operation: Operation = Operation.SELECT):
        return self.engine.scope(self.db.query(model), model, self.caller.identity_id, operation)

    def _find(self, model, row_id: str, operation: Operation = Operation.SELECT):
        return self._query(model, operation).filter(model.id == row_id).first()

    def _commit(self) -> None:
        try:
            self.db.commit()
        except IntegrityError as err:
            self.db.rollback()
            raise constraint_from_integrity_error(err) from err

    def _insert(self, row, table: str):
        if not self.engine.authorize(self.db, self.caller.identity_id, row, Operation.INSERT):
            raise AuthorizationFiltered(table, Operation.INSERT.value)
        self.db.add(row)
        self._commit()
        self.db.refresh(row)
        logger.info("%s inserted %s %s", self.caller.identity_id, table, row.id)
        return row

    def _update(self, model, row_id: str, changes: Dict[str, Any], allowed: Iterable[str]):
        unknown = set(changes) - set(allowed)
        if unknown:
            raise ValidationFailed(
                f"Fields not updatable on {model.__tablename__}: {', '.join(sorted(unknown))}",
                details={"fields": sorted(unknown)},
            )

        row = self._find(model, row_id, Operation.UPDATE)
        if row is None:
            # invisible and missing rows are indistinguishable: zero rows affected
            return None

        try:
            for key, value in changes.items():
                setattr(row, key, value)
            if not self.engine.authorize(self.db, self.caller.identity_id, row, Operation.UPDATE):
                raise AuthorizationFiltered(model.__tablename__, Operation.UPDATE.value)
        except ProfessorAidError:
            self.db.rollback()
            raise

        self._commit()
        self.db.refresh(row)
        return row

    def _delete(self, model, row_id: str) -> bool:
        row = self._find(model, row_id, Operation.DELETE)
        if row is None:
            return False
        self.db.delete(row)
        self._commit()
        logger.info("%s deleted %s %s", self.caller.identity_id, model.__tablename__, row_id)
        return True

    # ------------------------------------------------------------
    # profiles
    # ------------------------------------------------------------
    def get_profile(self) -> Profile | None:
        return self._query(Profile).first()

    def create_profile(self, user_id: str, nome: str, email: str, escola: str | None = None) -> Profile:
        profile = Profile(id=str(uuid4()), user_id=user_id, nome=nome, email=email, escola=escola)
        return self._insert(profile, Profile.__tablename__)

    def update_profile(self, **changes) -> Profile | None:
        profile = self.get_profile()
        if profile is None:
            return None
        return self._update(Profile, profile.id, changes, _PROFILE_FIELDS)

    # ------------------------------------------------------------
    # turmas
    # ------------------------------------------------------------
    def list_turmas(self) -> List[Turma]:
        return self._query(Turma).order_by(Turma.created_at.desc()).all()

    def get_turma(self, turma_id: str) -> Turma | None:
        return self._find(Turma, turma_id)

    def create_turma(
        self,
        nome: str,
        ano_letivo: str,
        periodo: str | None = None,
        descricao: str | None = None,
        professor_id: str | None = None,
    ) -> Turma:
        if professor_id is None:
            profile = self.get_profile()
        else:
            profile = self._find(Profile, professor_id)
        if profile is None:
            raise DependencyMissing(Turma.__tablename__, Profile.__tablename__, professor_id)

        turma = Turma(
            id=str(uuid4()),
            professor_id=profile.id,
            nome=nome,
            ano_letivo=ano_letivo,
            periodo=periodo,
            descricao=descricao,
        )
        return self._insert(turma, Turma.__tablename__)

    def update_turma(self, turma_id: str, **changes) -> Turma | None:
        return self._update(Turma, turma_id, changes, _TURMA_FIELDS)

    def delete_turma(self, turma_id: str) -> bool:
        """Deletes the class; its atividades go with it in the same transaction."""
        return self._delete(Turma, turma_id)

    # ------------------------------------------------------------
    # atividades
    # ------------------------------------------------------------
    def list_atividades(
        self, turma_id: str | None = None, status: str | None = None, limit: int | None = None
    ) -> List[Atividade]:
        query = self._query(Atividade)
        if turma_id is not None:
            query = query.filter(Atividade.turma_id == turma_id)
        if status is not None:
            query = query.filter(Atividade.status == status)
        query = query.order_by(Atividade.created_at.desc())
        if limit is not None:
            query = query.limit(limit)
        return query.all()

    def get_atividade(self, atividade_id: str) -> Atividade | None:
        return self._find(Atividade, atividade_id)

    def create_atividade(self, turma_id: str, titulo: str, **fields) -> Atividade:
        unknown = set(fields) - {"descricao", "data_entrega", "tipo", "status"}
        if unknown:
            raise ValidationFailed(
                f"Unknown atividade fields: {', '.join(sorted(unknown))}",
                details={"fields": sorted(unknown)},
            )
        if self.get_turma(turma_id) is None:
            raise DependencyMissing(Atividade.__tablename__, Turma.__tablename__, turma_id)

        # status left out entirely falls back to the column default
        atividade = Atividade(id=str(uuid4()), turma_id=turma_id, titulo=titulo, **fields)
        return self._insert(atividade, Atividade.__tablename__)

    def update_atividade(self, atividade_id: str, **changes) -> Atividade | None:
        return self._update(Atividade, atividade_id, changes, _ATIVIDADE_FIELDS)

    def update_atividade_status(self, atividade_id: str, status: str) -> Atividade | None:
        return self.update_atividade(atividade_id, status=status)

    def delete_atividade(self, atividade_id: str) -> bool:
        return self._delete(Atividade, atividade_id)

    # ------------------------------------------------------------
    # dashboard
    # ------------------------------------------------------------
    def dashboard(self, recent: int = 5) -> Dict[str, Any]:
        turmas_total = self.engine.scope(
            self.db.query(func.count(Turma.id)), Turma, self.caller.identity_id
        ).scalar()
        atividades_total = self.engine.scope(
            self.db.query(func.count(Atividade.id)), Atividade, self.caller.identity_id
        ).scalar()
        pendentes = (
            self.engine.scope(self.db.query(func.count(Atividade.id)), Atividade, self.caller.identity_id)
            .filter(Atividade.status == "ativa")
            .scalar()
        )
        return {
            "turmas": turmas_total or 0,
            "atividades": atividades_total or 0,
            "atividades_pendentes": pendentes or 0,
            "recentes": self.list_atividades(limit=recent),
        }
