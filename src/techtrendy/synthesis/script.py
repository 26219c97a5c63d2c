"""Generation of the podcast script with a canned fallback."""
from __future__ import annotations

from typing import Optional, Protocol, Sequence
import asyncio
import logging

from ..clients import GeminiTextClient
from ..config import TextProviderConfig
from ..core.errors import MissingCredential
from ..core.roles import PERSONAS, Role
from ..core.types import DialogueSegment, RoleAssignment, Script, SegmentKind
from ..parsing import parse_script

LOGGER = logging.getLogger(__name__)


class TextCompletionClient(Protocol):
    async def complete(
        self,
        *,
        system_instruction: str,
        prompt: str,
        max_output_tokens: int,
        temperature: float,
    ) -> str:  # pragma: no cover - protocol
        ...


class ScriptGenerationError(RuntimeError):
    """Raised when no usable script could be obtained from the text provider."""


SYSTEM_INSTRUCTION = (
    "Jsi scenárista českého technologického podcastu Tech Trendy. "
    "Píšeš přirozený, věcný a živý dialog tří moderátorů v češtině."
)

_PROMPT_TEMPLATE = (
    "Napiš scénář epizody podcastu Tech Trendy (přibližně 15 minut).\n\n"
    "Moderátoři a jejich témata:\n{hosts}\n\n"
    "Formát:\n"
    "- každá replika začíná na novém řádku značkou mluvčího ve tvaru **Jméno:** text\n"
    "- scénické poznámky piš na samostatný řádek ve tvaru **[poznámka]**\n"
    "- začni krátkým úvodem a skonči rozloučením s posluchači\n"
    "- nepoužívej žádný jiný markdown"
)

_FALLBACK_SEGMENTS: tuple[DialogueSegment, ...] = (
    DialogueSegment(
        role=Role.NARRATOR,
        text=(
            "Vítejte u Tech Trendy podcastu! Dnes s vámi budou hovořit Petr Mára, Lubo Smid "
            "a Jarda Beck o nejnovějších technologických trendech."
        ),
        duration=8,
        kind=SegmentKind.INTRO,
    ),
    DialogueSegment(
        role=Role.PETR,
        text=(
            "Ahoj všem! Dnes jsem připravil zajímavá témata o GPT-4 Vision a kvantových počítačích. "
            "OpenAI skutečně posunulo hranice s multimodálními schopnostmi."
        ),
        duration=12,
    ),
    DialogueSegment(
        role=Role.LUBO,
        text=(
            "Super téma, Petře! Já se zaměřím na GitHub Copilot X a Meta Llama 2. "
            "Tyto nástroje mění způsob, jak programujeme."
        ),
        duration=10,
    ),
    DialogueSegment(
        role=Role.JARDA,
        text=(
            "A já vám povím o praktických dopadech Apple Vision Pro. "
            "Jak to změní uživatelské rozhraní budoucnosti?"
        ),
        duration=9,
    ),
    DialogueSegment(
        role=Role.PETR,
        text=(
            "Začněme s GPT-4 Vision. Co mě fascinuje je, že můžete nahrát obrázek a AI vám ho "
            "detailně popíše, analyzuje nebo dokonce vytvoří kód na základě nákresu UI."
        ),
        duration=15,
    ),
    DialogueSegment(
        role=Role.LUBO,
        text=(
            "To je přesně to, co vidím u GitHub Copilot X. Můžete se zeptat 'jak funguje tenhle kód?' "
            "a AI vám to vysvětlí v kontextu celého projektu."
        ),
        duration=12,
    ),
    DialogueSegment(
        role=Role.JARDA,
        text=(
            "Z UX pohledu je to revoluce. Vision Pro ukazuje, jak by mohly vypadat interfaces, "
            "kde nepotřebujete obrazovku - všechno je kolem vás."
        ),
        duration=11,
    ),
    DialogueSegment(
        role=Role.PETR,
        text=(
            "A kvantové počítače od IBM? 1000 qubitů je pořád daleko od praktického využití, "
            "ale směr je jasný."
        ),
        duration=10,
    ),
    DialogueSegment(
        role=Role.LUBO,
        text=(
            "Meta s Llama 2 ukázala, že open source AI může konkurovat komerčním řešením. "
            "To je pro vývojáře skvělá zpráva."
        ),
        duration=12,
    ),
    DialogueSegment(
        role=Role.NARRATOR,
        text="To bylo vše pro dnešní díl Tech Trendů. Děkujeme za poslech a těšíme se na vás příště!",
        duration=7,
        kind=SegmentKind.OUTRO,
    ),
)


def fallback_script() -> Script:
    """The canned script used whenever live generation fails."""

    return Script.from_segments(_FALLBACK_SEGMENTS)


def build_prompt(assignments: Sequence[RoleAssignment]) -> str:
    """User prompt listing every host with the titles of their topics."""

    lines = []
    for assignment in assignments:
        persona = PERSONAS.get(assignment.role)
        if persona is None:
            continue
        titles = "; ".join(topic.title for topic in assignment.topics) or "volná diskuse"
        lines.append(
            f"- {persona.name} ({persona.title}, značka **{persona.role.value.capitalize()}:**)\n"
            f"  zaměření: {persona.focus}\n"
            f"  témata: {titles}"
        )
    return _PROMPT_TEMPLATE.format(hosts="\n".join(lines))


class ScriptSynthesizer:
    """Turn topic assignments into a :class:`Script`.

    The remote attempt and the fallback are separate steps: :meth:`attempt`
    raises :class:`ScriptGenerationError` on any failure while
    :meth:`synthesize` never fails once the credential check passed.
    """

    def __init__(
        self,
        config: TextProviderConfig,
        *,
        client: Optional[TextCompletionClient] = None,
    ) -> None:
        self._config = config
        self._client = client

    async def synthesize(self, assignments: Sequence[RoleAssignment]) -> Script:
        self._require_credential()
        try:
            return await self.attempt(assignments)
        except ScriptGenerationError as exc:
            LOGGER.warning("Script generation failed, using fallback script: %s", exc)
            return fallback_script()

    async def attempt(self, assignments: Sequence[RoleAssignment]) -> Script:
        """Request a transcript from the text provider and parse it."""

        self._require_credential()
        prompt = build_prompt(assignments)
        try:
            client = self._get_client()
            transcript = await asyncio.wait_for(
                client.complete(
                    system_instruction=SYSTEM_INSTRUCTION,
                    prompt=prompt,
                    max_output_tokens=self._config.max_output_tokens,
                    temperature=self._config.temperature,
                ),
                timeout=self._config.timeout,
            )
        except asyncio.TimeoutError as exc:
            raise ScriptGenerationError(f"Text provider timed out after {self._config.timeout}s") from exc
        except Exception as exc:
            raise ScriptGenerationError(f"Text provider request failed: {exc}") from exc

        segments = parse_script(transcript or "")
        if not segments:
            raise ScriptGenerationError("Generated transcript did not contain any speaker segments")
        LOGGER.info("Parsed %s segments from generated transcript", len(segments))
        return Script.from_segments(segments)

    def _require_credential(self) -> None:
        if not (self._config.api_key or "").strip():
            raise MissingCredential("text")

    def _get_client(self) -> TextCompletionClient:
        if self._client is None:
            self._client = GeminiTextClient(
                api_key=self._config.api_key or "",
                base_url=self._config.base_url,
                model=self._config.model,
                timeout=self._config.timeout,
            )
        return self._client


__all__ = [
    "SYSTEM_INSTRUCTION",
    "ScriptGenerationError",
    "ScriptSynthesizer",
    "TextCompletionClient",
    "build_prompt",
    "fallback_script",
]
