"""Internal constants shared across the library."""

USER_AGENT = "pybifrost"

API_PREFIX = "/bifrost/hass"

UI_PAYLOAD_ENDPOINT = f"{API_PREFIX}/ui-payload"
UI_CONFIG_ENDPOINT = f"{API_PREFIX}/ui-config"
BRIDGE_INFO_ENDPOINT = f"{API_PREFIX}/bridge-info"
RUNTIME_CONFIG_ENDPOINT = f"{API_PREFIX}/runtime-config"
CONNECT_ENDPOINT = f"{API_PREFIX}/connect"
DISCONNECT_ENDPOINT = f"{API_PREFIX}/disconnect"
TOKEN_ENDPOINT = f"{API_PREFIX}/token"
SYNC_ENDPOINT = f"{API_PREFIX}/sync"
APPLY_ENDPOINT = f"{API_PREFIX}/apply"
LINKBUTTON_ENDPOINT = f"{API_PREFIX}/linkbutton"
RESET_BRIDGE_ENDPOINT = f"{API_PREFIX}/reset-bridge"
ENTITY_ENDPOINT = f"{API_PREFIX}/entity"
ROOM_ENDPOINT = f"{API_PREFIX}/room"
ROOMS_ENDPOINT = f"{API_PREFIX}/rooms"
USAGE_EVENT_ENDPOINT = f"{API_PREFIX}/patina/event"

# The fallback room every entity lands in; the bridge refuses to drop it.
DEFAULT_ROOM_ID = "home-assistant"
DEFAULT_ROOM_NAME = "Home Assistant"

# Usage level thresholds for the fresh/used/loved stages.
PATINA_USED_LEVEL = 26
PATINA_LOVED_LEVEL = 71
