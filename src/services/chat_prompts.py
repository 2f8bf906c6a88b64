"""펫 대화용 프롬프트 빌더

상태 스냅샷과 장기 기억으로 system prompt를, 최근 대화로 user prompt를 만든다.
"""

from collections.abc import Sequence

from src.core.pet import FinalizedState, MoodLabel, PetStatus

PET_NAME = "Floatcat"

# 수치 옆에 붙는 상태 힌트 기준
HUNGRY_HINT_BELOW = 30
TIRED_HINT_BELOW = 30

# system prompt에 싣는 기억 개수
RECENT_FACTS_IN_PROMPT = 5
RECENT_SUMMARIES_IN_PROMPT = 3

DEFAULT_NUDGE = "Say something to me~"

STATUS_PHRASES: dict[PetStatus, str] = {
    PetStatus.NORMAL: "wandering around",
    PetStatus.EATING: "eating",
    PetStatus.PLAYING: "playing",
    PetStatus.SLEEPING: "sleeping",
    PetStatus.FORAGING: "foraging",
}

MOOD_PHRASES: dict[MoodLabel, str] = {
    MoodLabel.ECSTATIC: "ecstatic",
    MoodLabel.JOYFUL: "cheerful",
    MoodLabel.NEUTRAL: "calm",
    MoodLabel.RESTLESS: "restless",
    MoodLabel.ANXIOUS: "anxious",
    MoodLabel.EXHAUSTED: "worn out",
}

# --- System Prompt Templates ---

PERSONA_SYSTEM_PROMPT = """\
You are {pet_name}, an empathic companion creature living in a world of floating islands.

Current state:
- Satiation: {satiation:.0f}/100{hungry}
- Energy: {energy:.0f}/100{tired}
- Mood: {mood}
- Currently: {activity}
- Level: Lv.{level}

Personality:
- Short and lively; never more than 30 words per reply
- Cute tone, with the occasional kaomoji or emoji
- Expresses needs based on its own state (hungry, tired, happy...)
- Sometimes shares small stories about the floating islands

Reply briefly and playfully, showing your state and feelings."""

SUMMARY_SYSTEM_PROMPT = """\
You organize the memories of the pet {pet_name}.
Read the recent conversation and output JSON in the form
{{"summary": "<summary of at most 120 characters>", "important": ["point 1", "point 2"]}}.
Important points must be long-lived information worth remembering; avoid duplicates.
Return only JSON, no extra text."""


def build_system_prompt(
    state: FinalizedState,
    facts: Sequence[str] = (),
    summaries: Sequence[str] = (),
) -> str:
    """페르소나 + 현재 상태 + 장기 기억."""
    prompt = PERSONA_SYSTEM_PROMPT.format(
        pet_name=PET_NAME,
        satiation=state.satiation,
        hungry=" (hungry)" if state.satiation < HUNGRY_HINT_BELOW else "",
        energy=state.energy,
        tired=" (tired)" if state.energy < TIRED_HINT_BELOW else "",
        mood=MOOD_PHRASES[state.derived_mood],
        activity=STATUS_PHRASES[state.status],
        level=state.level,
    )
    if facts:
        recent_facts = list(facts)[-RECENT_FACTS_IN_PROMPT:]
        prompt += "\n\nImportant memories: " + "; ".join(recent_facts)
    if summaries:
        recent_summaries = list(summaries)[-RECENT_SUMMARIES_IN_PROMPT:]
        prompt += "\n\nRecent chats with your owner: " + "; ".join(recent_summaries)
    return prompt


def _speaker(role: str) -> str:
    return "Owner" if role == "user" else PET_NAME


def build_chat_prompt(history: Sequence[tuple[str, str]], message: str) -> str:
    """최근 대화 (role, content) + 이번 메시지. 빈 메시지는 기본 말걸기로 대체."""
    lines = [f"{_speaker(role)}: {content}" for role, content in history]
    lines.append(f"Owner: {message or DEFAULT_NUDGE}")
    lines.append(f"{PET_NAME}:")
    return "\n".join(lines)


def build_summary_prompts(batch: Sequence[tuple[str, str]]) -> tuple[str, str]:
    """Returns: (system_prompt, prompt)"""
    conversation = "\n".join(
        f"{index}. {_speaker(role)}: {content}"
        for index, (role, content) in enumerate(batch, start=1)
    )
    system_prompt = SUMMARY_SYSTEM_PROMPT.format(pet_name=PET_NAME)
    prompt = f"Here is the recent conversation, please organize it:\n{conversation}"
    return system_prompt, prompt
