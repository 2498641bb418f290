import json
import logging

import pytest

from nbinputs.bridge import (
    CLEARED_HISTORY,
    CleanupAction,
    HostCommunicationError,
    InMemoryBridge,
    LifecycleError,
    OwnerId,
    ReferenceRecord,
    RefState,
    ReleaseReason,
    SubscriptionBus,
    attach_reference,
)
from nbinputs.inputs import DescriptorFactory
from nbinputs.inputs.options import text_attrs

from conftest import TEST_DESTINATION


def test_record_moves_forward_only(owner):
    record = ReferenceRecord(ref="r1", owner=owner)
    assert record.state is RefState.REGISTERED

    record.arm("bus", CleanupAction.clear_topic("r1"))
    assert record.state is RefState.MONITORED

    assert record.release(ReleaseReason.REMOVED) == ("bus", CleanupAction("clear_topic", "r1"))
    assert record.state is RefState.RELEASED
    assert record.release(ReleaseReason.OWNER_TERMINATED) is None
    assert record.release_reason is ReleaseReason.REMOVED

    with pytest.raises(LifecycleError):
        record.arm("bus", CleanupAction.clear_topic("r1"))


def test_record_released_before_monitor_has_no_cleanup(owner):
    record = ReferenceRecord(ref="r1", owner=owner)
    assert record.release(ReleaseReason.OWNER_TERMINATED) is None
    assert record.state is RefState.RELEASED


def test_cleanup_must_target_its_own_ref(owner):
    record = ReferenceRecord(ref="r1", owner=owner)
    with pytest.raises(LifecycleError):
        record.arm("bus", CleanupAction.clear_topic("r2"))


def test_attach_reference_registers_then_monitors(bridge, owner):
    attach_reference(bridge, "r1", TEST_DESTINATION, owner=owner)
    assert bridge.reference_state("r1") is RefState.MONITORED


def test_host_rejects_second_owner_for_same_ref(bridge, owner):
    attach_reference(bridge, "r1", TEST_DESTINATION, owner=owner)
    other = OwnerId(hostname="elsewhere", pid=1, nonce="x")
    with pytest.raises(HostCommunicationError):
        bridge.reference_object("r1", other)


def test_owner_termination_clears_topics_exactly_once(factory, bridge, owner):
    first = factory.create("text", text_attrs("A"))
    second = factory.create("text", text_attrs("B"))
    bus = bridge.bus(TEST_DESTINATION)
    received = []
    bus.subscribe(first.ref, received.append)

    bridge.release_owner(owner)
    bridge.release_owner(owner)

    assert sorted(bus.cleared_topics) == sorted([first.ref, second.ref])
    assert bus.subscribers(first.ref) == 0
    assert bridge.reference_state(first.ref) is None
    assert bridge.reference_state(second.ref) is None


def test_other_owners_are_untouched(bridge, owner):
    other = OwnerId(hostname="test-host", pid=1, nonce="other")
    mine = DescriptorFactory(bridge, TEST_DESTINATION, owner=owner).create("text", text_attrs("A"))
    theirs = DescriptorFactory(bridge, TEST_DESTINATION, owner=other).create("text", text_attrs("A"))

    bridge.release_owner(owner)

    assert bridge.reference_state(mine.ref) is None
    assert bridge.reference_state(theirs.ref) is RefState.MONITORED


def test_explicit_removal_releases_reference(factory, bridge):
    descriptor = factory.create("text", text_attrs("A"))
    bridge.render(descriptor)

    bridge.remove(descriptor.id)

    assert bridge.reference_state(descriptor.ref) is None
    assert bridge.bus(TEST_DESTINATION).cleared_topics == [descriptor.ref]
    assert bridge.get_input_value(descriptor.id).ok is False


def test_rerender_supersedes_old_ref_but_not_the_new_one(factory, bridge):
    original = factory.create("text", text_attrs("A"))
    bridge.render(original)
    bridge.set_value(original.id, "typed")

    copy = factory.duplicate(original)
    bridge.render(copy)

    assert bridge.reference_state(original.ref) is None
    assert bridge.reference_state(copy.ref) is RefState.MONITORED
    assert bridge.bus(TEST_DESTINATION).cleared_topics == [original.ref]
    # value survives through the shared persistent id
    assert bridge.get_input_value(copy.id).value == "typed"

    # a late release of the old ref is a no-op
    assert bridge.release_reference(original.ref, ReleaseReason.OWNER_TERMINATED) is False
    assert bridge.reference_state(copy.ref) is RefState.MONITORED


def test_released_reference_cannot_be_rendered(factory, bridge, owner):
    descriptor = factory.create("text", text_attrs("A"))
    bridge.release_owner(owner)
    with pytest.raises(HostCommunicationError):
        bridge.render(descriptor)


def test_change_events_reach_subscribers(factory, bridge):
    descriptor = factory.create("text", text_attrs("A"))
    bridge.render(descriptor)
    received = []
    bridge.bus(descriptor.destination).subscribe(descriptor.ref, received.append)

    bridge.set_value(descriptor.id, "hello")

    assert received == [{"type": "change", "value": "hello"}]


def test_standalone_bridge_tokens_are_session_scoped():
    a, b = InMemoryBridge(), InMemoryBridge()
    assert a.generate_token() == a.generate_token()
    assert a.generate_token() != b.generate_token()


def test_released_references_are_forgotten(factory, bridge, owner):
    descriptors = [factory.create("text", text_attrs(f"Field {n}")) for n in range(50)]
    for descriptor in descriptors:
        bridge.render(descriptor)
    assert len(bridge.references(owner)) == 50

    bridge.release_owner(owner)

    assert bridge.references() == []
    gone = descriptors[0].ref
    with pytest.raises(HostCommunicationError, match="unknown reference"):
        bridge.monitor_object(gone, TEST_DESTINATION, CleanupAction.clear_topic(gone))


def test_cleared_topic_history_is_bounded():
    bus = SubscriptionBus(TEST_DESTINATION)
    for n in range(CLEARED_HISTORY + 10):
        bus.handle(("clear_topic", f"r{n}"))
    cleared = bus.cleared_topics
    assert len(cleared) == CLEARED_HISTORY
    assert cleared[-1] == f"r{CLEARED_HISTORY + 9}"


def test_release_is_logged_as_structured_event(factory, bridge, owner, caplog):
    caplog.set_level(logging.INFO, logger="nbinputs")
    descriptor = factory.create("text", text_attrs("A"))

    bridge.release_owner(owner)

    payloads = [json.loads(r.getMessage()) for r in caplog.records if r.name == "nbinputs.observability.logging"]
    released = [p for p in payloads if p.get("name") == "reference.released"]
    assert released == [
        {
            "type": "event",
            "name": "reference.released",
            "fields": {"ref": descriptor.ref, "reason": "owner_terminated", "destination": TEST_DESTINATION},
        }
    ]
