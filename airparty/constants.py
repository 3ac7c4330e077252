# Inbound message types
MSG_HELLO = "hello"
MSG_PING = "ping"
MSG_CREATE_ROOM = "create_room"
MSG_JOIN_ROOM = "join_room"
MSG_RELAY = "relay"

# Outbound envelope types
MSG_HELLO_ACK = "hello_ack"
MSG_PONG = "pong"
MSG_ERROR = "error"
MSG_ROOM_CREATED = "room_created"
MSG_ROOM_JOINED = "room_joined"
MSG_PEER_JOINED = "peer_joined"
MSG_PEER_LEFT = "peer_left"
MSG_HOST_UPDATE = "host_update"

# Relay targets that fan out to every member except the sender.
BROADCAST_TARGETS: frozenset[str] = frozenset({"*", "all"})

# Seconds an empty room survives before it is pruned (allows reconnects).
DEFAULT_ROOM_GRACE_SECONDS: float = 5 * 60

# Per-connection outbound queue bound; sends beyond it are dropped.
DEFAULT_SEND_QUEUE_SIZE: int = 256

__all__ = [
    "MSG_HELLO",
    "MSG_PING",
    "MSG_CREATE_ROOM",
    "MSG_JOIN_ROOM",
    "MSG_RELAY",
    "MSG_HELLO_ACK",
    "MSG_PONG",
    "MSG_ERROR",
    "MSG_ROOM_CREATED",
    "MSG_ROOM_JOINED",
    "MSG_PEER_JOINED",
    "MSG_PEER_LEFT",
    "MSG_HOST_UPDATE",
    "BROADCAST_TARGETS",
    "DEFAULT_ROOM_GRACE_SECONDS",
    "DEFAULT_SEND_QUEUE_SIZE",
]
