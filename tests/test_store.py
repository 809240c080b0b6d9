import unittest
from datetime import date, datetime

from sqlalchemy.exc import IntegrityError

from professor_aid.exceptions import ConstraintViolation, ValidationFailed
from professor_aid.models import Atividade, AuthSession, Identity, Profile, Turma
from professor_aid.services import identity as identity_service
from tests.support import make_sessionmaker, repo_for, sign_up


class EntityStoreTests(unittest.TestCase):
    def setUp(self):
        self.engine, Session = make_sessionmaker()
        self.db = Session()
        self.caller = sign_up(self.db, "prof@escola.com")
        self.repo = repo_for(self.db, self.caller)
        self.turma = self.repo.create_turma("3º Ano", "2025", periodo="noturno", descricao="Turma da noite")

    def tearDown(self):
        self.db.close()
        self.engine.dispose()

    def test_tipo_outside_enum_is_a_constraint_violation(self):
        with self.assertRaises(ConstraintViolation) as ctx:
            self.repo.create_atividade(self.turma.id, "Errada", tipo="seminario")
        self.assertEqual(ctx.exception.constraint, "atividades_tipo_check")
        self.assertEqual(self.db.query(Atividade).count(), 0)

    def test_tipo_omitted_is_null_and_status_defaults_to_ativa(self):
        atividade = self.repo.create_atividade(self.turma.id, "Leitura", data_entrega=date(2025, 9, 1))
        self.assertIsNone(atividade.tipo)
        self.assertEqual(atividade.status, "ativa")
        self.assertEqual(atividade.data_entrega, date(2025, 9, 1))

    def test_invalid_periodo_and_status(self):
        with self.assertRaises(ConstraintViolation) as ctx:
            self.repo.create_turma("Sem período", "2025", periodo="integral")
        self.assertEqual(ctx.exception.constraint, "turmas_periodo_check")

        atividade = self.repo.create_atividade(self.turma.id, "Projeto", tipo="projeto")
        with self.assertRaises(ConstraintViolation):
            self.repo.update_atividade_status(atividade.id, "arquivada")
        self.db.expire_all()
        self.assertEqual(self.db.get(Atividade, atividade.id).status, "ativa")

    def test_check_constraints_hold_without_model_validation(self):
        with self.assertRaises(IntegrityError):
            self.db.execute(
                Turma.__table__.insert().values(
                    id="raw", professor_id=self.turma.professor_id, nome="Raw", ano_letivo="2025", periodo="integral"
                )
            )
        self.db.rollback()

    def test_unknown_fields_are_refused(self):
        with self.assertRaises(ValidationFailed):
            self.repo.update_turma(self.turma.id, created_at=datetime(2000, 1, 1))
        with self.assertRaises(ValidationFailed):
            self.repo.create_atividade(self.turma.id, "X", nota=10)

    def test_not_null_violation_is_translated(self):
        with self.assertRaises(ConstraintViolation):
            self.repo.update_turma(self.turma.id, nome=None)
        self.db.expire_all()
        self.assertEqual(self.db.get(Turma, self.turma.id).nome, "3º Ano")

    def test_updated_at_is_always_refreshed(self):
        previous = self.turma.updated_at
        updated = self.repo.update_turma(self.turma.id, descricao="Nova", updated_at=datetime(2000, 1, 1))
        self.assertGreaterEqual(updated.updated_at, previous)
        self.assertEqual(updated.created_at, self.turma.created_at)

        profile = self.repo.get_profile()
        before = profile.updated_at
        profile = self.repo.update_profile(escola="EMEF Rio Branco", updated_at=datetime(1999, 12, 31))
        self.assertEqual(profile.escola, "EMEF Rio Branco")
        self.assertGreaterEqual(profile.updated_at, before)

        atividade = self.repo.create_atividade(self.turma.id, "Exercícios", tipo="exercicio")
        before = atividade.updated_at
        atividade = self.repo.update_atividade(atividade.id, updated_at=datetime(2001, 1, 1))
        self.assertGreaterEqual(atividade.updated_at, before)

    def test_deleting_turma_cascades_to_atividades(self):
        keep = self.repo.create_turma("4º Ano", "2025")
        self.repo.create_atividade(self.turma.id, "A", tipo="tarefa")
        self.repo.create_atividade(self.turma.id, "B", tipo="trabalho")
        survivor = self.repo.create_atividade(keep.id, "C", tipo="prova")

        self.assertTrue(self.repo.delete_turma(self.turma.id))

        remaining = self.db.query(Atividade).all()
        self.assertEqual([a.id for a in remaining], [survivor.id])
        self.assertIsNone(self.db.get(Turma, self.turma.id))

    def test_deleting_identity_cascades_down_the_chain(self):
        self.repo.create_atividade(self.turma.id, "A", tipo="tarefa")
        other = sign_up(self.db, "outro@escola.com")
        other_turma = repo_for(self.db, other).create_turma("Outra", "2025")

        self.assertTrue(identity_service.delete_identity(self.db, self.caller.identity_id))

        self.db.expire_all()
        self.assertEqual(self.db.query(Profile).filter(Profile.user_id == self.caller.identity_id).count(), 0)
        self.assertEqual([t.id for t in self.db.query(Turma).all()], [other_turma.id])
        self.assertEqual(self.db.query(Atividade).count(), 0)
        self.assertEqual(self.db.query(AuthSession).filter(AuthSession.user_id == self.caller.identity_id).count(), 0)
        self.assertEqual(self.db.query(Identity).count(), 1)
        self.assertFalse(identity_service.delete_identity(self.db, self.caller.identity_id))

    def test_list_filters_and_dashboard(self):
        other_turma = self.repo.create_turma("2º Ano", "2025", periodo="vespertino")
        a = self.repo.create_atividade(self.turma.id, "A", tipo="tarefa")
        self.repo.create_atividade(self.turma.id, "B", tipo="prova", status="finalizada")
        self.repo.create_atividade(other_turma.id, "C", tipo="projeto")

        self.assertEqual(len(self.repo.list_atividades()), 3)
        self.assertEqual({x.titulo for x in self.repo.list_atividades(turma_id=self.turma.id)}, {"A", "B"})
        self.assertEqual({x.titulo for x in self.repo.list_atividades(status="ativa")}, {"A", "C"})
        self.assertEqual(
            [x.id for x in self.repo.list_atividades(turma_id=self.turma.id, status="ativa")], [a.id]
        )

        stats = self.repo.dashboard(recent=2)
        self.assertEqual(stats["turmas"], 2)
        self.assertEqual(stats["atividades"], 3)
        self.assertEqual(stats["atividades_pendentes"], 2)
        self.assertEqual(len(stats["recentes"]), 2)
        self.assertEqual(len(self.repo.list_atividades(limit=1)), 1)


class EndToEndScenarioTests(unittest.TestCase):
    def setUp(self):
        self.engine, Session = make_sessionmaker()
        self.db = Session()

    def tearDown(self):
        self.db.close()
        self.engine.dispose()

    def test_second_teacher_cannot_see_first_teachers_assignment(self):
        u1 = sign_up(self.db, "u1@escola.com", "Professora Um")
        p1 = self.db.query(Profile).filter(Profile.user_id == u1.identity_id).one()

        repo1 = repo_for(self.db, u1)
        turma = repo1.create_turma("5º Ano A", "2025", periodo="matutino")
        self.assertEqual(turma.professor_id, p1.id)
        atividade = repo1.create_atividade(turma.id, "Prova de Matemática", tipo="prova")
        self.assertEqual(atividade.turma_id, turma.id)

        u2 = sign_up(self.db, "u2@escola.com", "Professor Dois")
        p2 = self.db.query(Profile).filter(Profile.user_id == u2.identity_id).one()
        self.assertNotEqual(p1.id, p2.id)

        repo2 = repo_for(self.db, u2)
        self.assertIsNone(repo2.get_atividade(atividade.id))
        self.assertEqual(repo2.list_atividades(), [])


if __name__ == "__main__":
    unittest.main()
