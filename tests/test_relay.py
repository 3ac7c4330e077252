import pytest

from airparty.relay import is_broadcast, relay


@pytest.fixture
def room_abc(store, make_conn):
    conns = {cid: make_conn(cid) for cid in ("a", "b", "c")}
    store.set_host("r1", "a")
    for cid, conn in conns.items():
        store.add_member("r1", cid, conn)
    for conn in conns.values():
        conn.clear()
    return conns


def test_broadcast_sentinels():
    assert is_broadcast("*")
    assert is_broadcast("all")
    assert not is_broadcast("a")
    assert not is_broadcast("ALL")


@pytest.mark.parametrize("target", ["*", "all"])
def test_broadcast_reaches_everyone_but_sender(store, room_abc, target):
    delivered = relay(store, "r1", "a", target, {"cue": 1})

    assert delivered == 2
    assert room_abc["a"].sent == []
    for cid in ("b", "c"):
        (envelope,) = room_abc[cid].sent
        assert envelope["type"] == "relay"
        assert envelope["from"] == "a"
        assert envelope["payload"] == {"cue": 1}
        assert isinstance(envelope["serverNow"], int)


def test_directed_relay_reaches_only_target(store, room_abc):
    assert relay(store, "r1", "b", "c", "offer") == 1

    assert room_abc["a"].sent == []
    assert room_abc["b"].sent == []
    assert [m["payload"] for m in room_abc["c"].sent] == ["offer"]


def test_directed_relay_to_absent_member_is_silent(store, room_abc):
    assert relay(store, "r1", "a", "zed", {"x": 1}) == 0
    assert all(conn.sent == [] for conn in room_abc.values())


def test_relay_into_missing_room_is_noop(store):
    assert relay(store, "ghost", "a", "*", None) == 0
    assert "ghost" not in store


def test_broadcast_skips_closed_connections(store, room_abc):
    room_abc["b"].is_open = False

    assert relay(store, "r1", "a", "*", "ping") == 1
    assert room_abc["b"].sent == []
    assert len(room_abc["c"].sent) == 1


@pytest.mark.parametrize("payload", [0, "", False, [], None, {"nested": {"deep": [1, 2, 3]}}])
def test_payload_passes_through_untouched(store, room_abc, payload):
    relay(store, "r1", "a", "b", payload)
    assert room_abc["b"].sent[0]["payload"] == payload


def test_sender_not_in_room_can_still_broadcast(store, room_abc):
    assert relay(store, "r1", "outsider", "*", "hi") == 3
