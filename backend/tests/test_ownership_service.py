"""Service-level checks straight against the session factory."""
import uuid
import pytest
from sqlalchemy import func, select
from sqlalchemy.exc import OperationalError
from onefit.db import SessionLocal
from onefit.errors import ConflictError, InternalError, NotFoundOrForbidden
from onefit.models import WorkoutSession, WorkoutTemplate
from onefit.repositories.exercise_repo import ExerciseRepository
from onefit.repositories.template_repo import TemplateRepository
from onefit.repositories.user_repo import UserRepository
from onefit.repositories.workout_repo import WorkoutRepository
from onefit.services.ownership import owned_session, owned_session_exercise, owned_set, owned_template
from onefit.services.template_service import TemplateService
from onefit.services.workout_service import WorkoutService

@pytest.fixture
def db():
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()

def make_user(db):
    return UserRepository(db).get_or_create(external_uid=f"svc_{uuid.uuid4().hex[:10]}", email=None, name="svc")

def squats_id(db):
    return next(e.id for e in ExerciseRepository(db).list(None, search="Squats"))

def test_chain_resolves_for_owner_only(db):
    owner, stranger = make_user(db), make_user(db)
    svc = WorkoutService(db)
    session = svc.start(owner.id, name="Chain")
    entry = svc.add_exercise(session.id, owner.id, exercise_id=squats_id(db))
    exercise_set = svc.log_set(session.id, owner.id, entry.id, {"reps": 5})

    chain = owned_set(db, exercise_set.id, owner.id)
    assert chain.session.id == session.id
    assert chain.session_exercise.id == entry.id
    assert owned_session_exercise(db, entry.id, owner.id, session_id=session.id).session.id == session.id

    with pytest.raises(NotFoundOrForbidden):
        owned_session(db, session.id, stranger.id)
    with pytest.raises(NotFoundOrForbidden):
        owned_session_exercise(db, entry.id, stranger.id)
    with pytest.raises(NotFoundOrForbidden):
        owned_set(db, exercise_set.id, stranger.id)

def test_deleted_links_break_the_chain(db):
    owner = make_user(db)
    svc = WorkoutService(db)
    session = svc.start(owner.id, name="Doomed")
    entry = svc.add_exercise(session.id, owner.id, exercise_id=squats_id(db))
    exercise_set = svc.log_set(session.id, owner.id, entry.id, {"weight": 20})
    svc.remove_exercise(session.id, owner.id, entry.id)
    with pytest.raises(NotFoundOrForbidden):
        owned_set(db, exercise_set.id, owner.id)
    # the session itself is still there
    assert owned_session(db, session.id, owner.id).id == session.id

def test_template_write_access_is_owner_only(db):
    owner, reader = make_user(db), make_user(db)
    templates = TemplateService(db)
    template = templates.create(owner.id, name="Public one", is_public=True)
    assert templates.get(template.id, reader.id).id == template.id
    with pytest.raises(NotFoundOrForbidden):
        owned_template(db, template.id, reader.id)
    with pytest.raises(NotFoundOrForbidden):
        templates.add_exercise(template.id, reader.id, exercise_id=squats_id(db))

def test_template_exercise_unique_per_template(db):
    owner = make_user(db)
    templates = TemplateService(db)
    template = templates.create(owner.id, name="Unique rows")
    templates.add_exercise(template.id, owner.id, exercise_id=squats_id(db), target_sets=3, target_reps="5")
    with pytest.raises(ConflictError):
        templates.add_exercise(template.id, owner.id, exercise_id=squats_id(db))

def test_start_copies_template_atomically(db):
    owner = make_user(db)
    templates = TemplateService(db)
    template = templates.create(owner.id, name="Copy me")
    templates.add_exercise(template.id, owner.id, exercise_id=squats_id(db), target_sets=5, target_reps="5")
    session = WorkoutService(db).start(owner.id, name="Copied", template_id=template.id)
    assert [(e.order_index, e.notes) for e in session.exercises] == [(1, "Target: 5 sets of 5")]

def fail_on_call(monkeypatch, cls, method, nth):
    original = getattr(cls, method)
    calls = {"n": 0}

    def flaky(self, **fields):
        calls["n"] += 1
        if calls["n"] == nth:
            raise OperationalError("INSERT", {}, Exception("disk full"))
        return original(self, **fields)

    monkeypatch.setattr(cls, method, flaky)

def two_entry_template(db, owner, name):
    templates = TemplateService(db)
    template = templates.create(owner.id, name=name)
    for ex_name in ("Squats", "Push-ups"):
        ex_id = next(e.id for e in ExerciseRepository(db).list(None, search=ex_name))
        templates.add_exercise(template.id, owner.id, exercise_id=ex_id)
    return template.id

def test_start_leaves_nothing_behind_when_copy_fails(db, monkeypatch):
    owner = make_user(db)
    owner_id = owner.id
    template_id = two_entry_template(db, owner, "Half copied")
    fail_on_call(monkeypatch, WorkoutRepository, "add_exercise", 2)

    with pytest.raises(InternalError):
        WorkoutService(db).start(owner_id, name="Broken", template_id=template_id)

    stmt = select(func.count()).select_from(WorkoutSession).where(WorkoutSession.user_id == owner_id)
    assert db.execute(stmt).scalar_one() == 0

def test_duplicate_leaves_nothing_behind_when_copy_fails(db, monkeypatch):
    owner = make_user(db)
    owner_id = owner.id
    template_id = two_entry_template(db, owner, "Original")
    fail_on_call(monkeypatch, TemplateRepository, "add_entry", 2)

    with pytest.raises(InternalError):
        TemplateService(db).duplicate(template_id, owner_id)

    names = db.execute(
        select(WorkoutTemplate.name).where(WorkoutTemplate.user_id == owner_id)
    ).scalars().all()
    assert names == ["Original"]
