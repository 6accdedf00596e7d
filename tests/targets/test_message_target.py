import pytest
from provider_verifier.exceptions import ProviderMethodNotFoundError, VerificationFailure
from provider_verifier.matching import BodyMismatch
from provider_verifier.targets import MessageTarget


@pytest.fixture
def target() -> MessageTarget:
    return MessageTarget()


@pytest.mark.asyncio
async def test_matching_message_passes(target, make_interaction):
    @target.provides("a user created event")
    def user_created():
        return {"type": "user.created", "id": 42, "emitted_at": "2024-01-01T00:00:00Z"}

    interaction = make_interaction(description="a user created event", body={"type": "user.created", "id": 42})

    await target.test_interaction(interaction)


@pytest.mark.asyncio
async def test_async_provider_method(target, make_interaction):
    @target.provides("a user deleted event")
    async def user_deleted():
        return b'{"type": "user.deleted", "id": 42}'

    interaction = make_interaction(
        description="a user deleted event",
        body={"type": "user.deleted", "id": 41},
        content_type="application/json",
    )

    with pytest.raises(VerificationFailure) as exc_info:
        await target.test_interaction(interaction)

    [mismatch] = exc_info.value.mismatches
    assert isinstance(mismatch, BodyMismatch)
    assert mismatch.path == "id"


@pytest.mark.asyncio
async def test_status_is_not_checked_for_messages(make_interaction):
    target = MessageTarget({"a ping": lambda: "pong"})
    interaction = make_interaction(description="a ping", status=404, body="pong")

    await target.test_interaction(interaction)


@pytest.mark.asyncio
async def test_missing_provider_method(target, make_interaction):
    interaction = make_interaction(description="an unknown event")

    with pytest.raises(ProviderMethodNotFoundError) as exc_info:
        await target.test_interaction(interaction)

    assert exc_info.value.interaction is interaction
    assert "an unknown event" in str(exc_info.value)
