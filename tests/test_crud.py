import uuid

import pytest

from app.core.errors import Conflict, Forbidden, InvalidState, NotFound, ValidationError
from app.models.user import UserRole
from app.prompts.crud import PromptCRUD, PromptFilters
from app.prompts.enums import Category, Purpose
from app.users.crud import UserCRUD


@pytest.fixture
def owner(db):
    return UserCRUD.register(db, "owner", "Owner@Example.com", "secret1")


@pytest.fixture
def prompt(db, owner):
    return PromptCRUD.create(
        db,
        owner_id=owner.id,
        title="  Title  ",
        content="Body",
        category="ビジネス",
        purpose=Purpose.SUMMARIZATION,
        tags=[" one ", "", "two"],
    )


def test_register_normalizes_email(owner):
    assert owner.email == "owner@example.com"
    assert owner.role == UserRole.USER.value


def test_register_admin_role(db):
    admin = UserCRUD.register(db, "admin", "admin@example.com", "secret1", role=UserRole.ADMIN)

    assert admin.is_admin


def test_register_rejects_short_username(db):
    with pytest.raises(ValidationError):
        UserCRUD.register(db, "ab", "ab@example.com", "secret1")


def test_register_conflict_on_case_insensitive_email(db, owner):
    with pytest.raises(Conflict):
        UserCRUD.register(db, "other", "OWNER@example.com", "secret1")


def test_create_cleans_input(prompt):
    assert prompt.title == "Title"
    assert prompt.category == Category.BUSINESS.value
    assert prompt.tags == ["one", "two"]
    assert prompt.service == "その他"
    assert prompt.usage_count == 0


def test_create_rejects_unknown_purpose(db, owner):
    with pytest.raises(ValidationError):
        PromptCRUD.create(db, owner.id, "T", "C", category="ビジネス", purpose="料理")


def test_update_ignores_none_and_keeps_deleted_flag(db, owner, prompt):
    PromptCRUD.soft_delete(db, prompt.id, owner.id)

    updated = PromptCRUD.update(db, prompt.id, owner.id, title=None, content="New body")

    assert updated.title == "Title"
    assert updated.content == "New body"
    assert updated.is_deleted is True
    assert updated.deleted_at is not None


def test_update_by_other_user_is_forbidden(db, prompt):
    with pytest.raises(Forbidden):
        PromptCRUD.update(db, prompt.id, uuid.uuid4(), title="x")


def test_restore_requires_deleted_prompt(db, owner, prompt):
    with pytest.raises(InvalidState):
        PromptCRUD.restore(db, prompt.id, owner.id)


def test_get_by_id_hides_deleted_unless_included(db, owner, prompt):
    PromptCRUD.soft_delete(db, prompt.id, owner.id)

    with pytest.raises(NotFound):
        PromptCRUD.get_by_id(db, prompt.id)
    assert PromptCRUD.get_by_id(db, prompt.id, include_deleted=True).id == prompt.id


def test_list_include_deleted(db, owner, prompt):
    PromptCRUD.soft_delete(db, prompt.id, owner.id)

    assert PromptCRUD.list_prompts(db, PromptFilters()) == []
    assert [p.id for p in PromptCRUD.list_prompts(db, PromptFilters(include_deleted=True))] == [prompt.id]


def test_like_toggle_twice_restores_original_set(db, owner, prompt):
    assert PromptCRUD.toggle_like(db, prompt.id, owner.id) == [owner.id]
    assert PromptCRUD.toggle_like(db, prompt.id, owner.id) == []


def test_increment_usage_on_missing_prompt(db):
    with pytest.raises(NotFound):
        PromptCRUD.increment_usage(db, uuid.uuid4())


def test_delete_comment_on_deleted_prompt_is_allowed(db, owner, prompt):
    comments = PromptCRUD.add_comment(db, prompt.id, owner.id, "hello")
    PromptCRUD.soft_delete(db, prompt.id, owner.id)

    assert PromptCRUD.delete_comment(db, prompt.id, comments[0].id, owner.id) == []


def test_toggle_follow_self_is_rejected(db, owner):
    with pytest.raises(ValidationError):
        UserCRUD.toggle_follow(db, owner.id, owner.id)
