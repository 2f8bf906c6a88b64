"""이벤트 유형 상수"""


class EventTypes:
    """이벤트 유형 문자열 상수"""

    # === Pet lifecycle (pet_service) ===
    PET_CREATED = "pet_created"
    PET_ACTION_PERFORMED = "pet_action_performed"
    PET_TICKED = "pet_ticked"
    PET_STATUS_CHANGED = "pet_status_changed"
    PET_LEVELED_UP = "pet_leveled_up"
    PET_FLAGS_CHANGED = "pet_flags_changed"

    # === Chat (chat_service) ===
    CHAT_REPLIED = "chat_replied"
