import json
import logging

import anyio
import pytest

from programming_helper.errors import TransportOrModelError
from programming_helper.outcomes import OutcomeKind
from programming_helper.panels.component_namer import ComponentNamerPanel
from programming_helper.panels.grammar_checker import GrammarCheckerPanel
from programming_helper.panels.image_prompt import ImagePromptPanel
from programming_helper.panels.sentence_rewriter import SentenceRewriterPanel
from programming_helper.panels.summarizer import SummarizerPanel
from programming_helper.prompts import component_namer, grammar_checker, summarizer
from programming_helper.schemas import LengthControlType, PanelStatus, RewriteGoal, Sender

from .conftest import FakeGateway

ALL_PANELS = [
    ComponentNamerPanel,
    SentenceRewriterPanel,
    GrammarCheckerPanel,
    SummarizerPanel,
    ImagePromptPanel,
]


@pytest.mark.anyio
@pytest.mark.parametrize("panel_type", ALL_PANELS)
@pytest.mark.parametrize("text", ["", "   ", "\n\t  "])
async def test_blank_input_never_calls_gateway(panel_type, text):
    gateway = FakeGateway("anything")
    panel = panel_type(gateway)
    panel.apply_form({"text": text})

    assert await panel.submit() is None
    assert gateway.calls == 0
    assert panel.status == PanelStatus.IDLE


@pytest.mark.anyio
@pytest.mark.parametrize("panel_type", ALL_PANELS)
async def test_submit_while_loading_is_ignored(panel_type):
    gateway = FakeGateway("anything")
    panel = panel_type(gateway)
    panel.apply_form({"text": "some real input"})
    panel.status = PanelStatus.SUBMITTING

    assert await panel.submit() is None
    assert gateway.calls == 0


@pytest.mark.anyio
@pytest.mark.parametrize("panel_type", ALL_PANELS)
async def test_unavailable_gateway_is_never_called(panel_type):
    gateway = FakeGateway("anything", available=False)
    panel = panel_type(gateway)
    panel.apply_form({"text": "some real input"})

    assert panel.disabled is True
    assert await panel.submit() is None
    assert gateway.calls == 0


@pytest.mark.anyio
async def test_second_submit_during_in_flight_request_is_ignored():
    release = anyio.Event()
    gateway = FakeGateway("A concise rewrite.")
    original_generate = gateway.generate

    async def slow_generate(prompt):
        await release.wait()
        return await original_generate(prompt)

    gateway.generate = slow_generate
    panel = SentenceRewriterPanel(gateway)
    panel.apply_form({"text": "first sentence"})
    results = []

    async def first():
        results.append(await panel.submit())

    async with anyio.create_task_group() as tg:
        tg.start_soon(first)
        await anyio.wait_all_tasks_blocked()
        assert panel.is_loading
        panel.apply_form({"text": "second sentence"})
        assert await panel.submit() is None
        release.set()

    assert gateway.calls == 1
    assert results[0].kind == OutcomeKind.SUCCESS
    assert not panel.is_loading


@pytest.mark.anyio
async def test_component_namer_scenario():
    gateway = FakeGateway("SubmitButton\nFormSubmitButton")
    panel = ComponentNamerPanel(gateway)
    panel.apply_form({"text": "a button that submits a form", "language": "English", "count": "2"})

    outcome = await panel.submit()

    assert gateway.calls == 1
    assert "a button that submits a form" in gateway.last_prompt
    assert "generate exactly 2" in gateway.last_prompt
    assert outcome.kind == OutcomeKind.SUCCESS
    assert [(m.sender, m.text) for m in panel.messages] == [
        (Sender.USER, "a button that submits a form"),
        (Sender.AI, "SubmitButton\nFormSubmitButton"),
    ]
    assert panel.input_text == ""
    assert panel.status == PanelStatus.SUCCESS


@pytest.mark.anyio
async def test_conversation_log_accumulates_turns():
    replies = iter(["FirstName", "", "ThirdName"])
    gateway = FakeGateway(lambda prompt: next(replies))
    panel = ComponentNamerPanel(gateway)

    for text in ("one", "two", "three"):
        panel.apply_form({"text": text})
        await panel.submit()

    assert [m.text for m in panel.messages] == [
        "one",
        "FirstName",
        "two",
        ComponentNamerPanel.empty_message,
        "three",
        "ThirdName",
    ]


@pytest.mark.anyio
async def test_component_namer_refusal_is_shown_and_logged(caplog):
    gateway = FakeGateway(f"  {component_namer.REFUSAL_MESSAGE}\n")
    panel = ComponentNamerPanel(gateway)
    panel.apply_form({"text": "what is 2 + 2?"})

    with caplog.at_level(logging.WARNING):
        outcome = await panel.submit()

    assert outcome.kind == OutcomeKind.REFUSAL
    assert panel.messages[-1].text == component_namer.REFUSAL_MESSAGE
    assert panel.status == PanelStatus.FAILED
    assert "refused" in caplog.text


@pytest.mark.anyio
async def test_rewriter_transport_error_becomes_ai_turn():
    gateway = FakeGateway(TransportOrModelError("[503] Service unavailable"))
    panel = SentenceRewriterPanel(gateway)
    panel.apply_form({"text": "fix me", "goal": RewriteGoal.CASUAL.value, "count": "3"})

    outcome = await panel.submit()

    assert outcome.kind == OutcomeKind.TRANSPORT_ERROR
    assert panel.messages[-1].sender == Sender.AI
    assert panel.messages[-1].text == "An error occurred: [503] Service unavailable"
    assert "Make More Casual" in gateway.last_prompt
    assert not panel.is_loading


@pytest.mark.anyio
async def test_summarizer_empty_response_scenario():
    gateway = FakeGateway("")
    panel = SummarizerPanel(gateway)
    panel.apply_form({
        "text": "A long article about the history of typography.",
        "length_control_type": "WordCount",
        "word_count_length": "50",
    })

    outcome = await panel.submit()

    assert "around 50 words" in gateway.last_prompt
    assert outcome.kind == OutcomeKind.EMPTY
    assert panel.error_message == "The AI returned an empty summary."
    assert panel.result is None


@pytest.mark.anyio
async def test_summarizer_success_clears_previous_error():
    replies = iter([summarizer.REFUSAL_MESSAGE, "Typography evolved from movable type."])
    gateway = FakeGateway(lambda prompt: next(replies))
    panel = SummarizerPanel(gateway)
    panel.apply_form({"text": "Some text worth summarizing here."})

    await panel.submit()
    assert panel.error_message == summarizer.REFUSAL_MESSAGE
    assert panel.result is None

    await panel.submit()
    assert panel.error_message is None
    assert panel.result == "Typography evolved from movable type."
    assert panel.context()["summary_words"] == 5


@pytest.mark.parametrize(
    "raw, expected",
    [("5", 20), ("0", 20), ("-40", 20), ("lots", 20), ("150", 150), ("", 100)],
)
def test_summarizer_word_count_is_raised_to_minimum(raw, expected):
    panel = SummarizerPanel(FakeGateway())
    panel.apply_form({"length_control_type": "WordCount", "word_count_length": raw})

    assert panel.length_control_type == LengthControlType.WORD_COUNT
    assert panel.length_option().value == expected


def test_invalid_options_raise_value_error():
    with pytest.raises(ValueError):
        ComponentNamerPanel(FakeGateway()).apply_form({"count": "11"})
    with pytest.raises(ValueError):
        ComponentNamerPanel(FakeGateway()).apply_form({"language": "Klingon"})
    with pytest.raises(ValueError):
        SummarizerPanel(FakeGateway()).apply_form({"percentage_length": "95"})
    with pytest.raises(ValueError):
        ImagePromptPanel(FakeGateway()).apply_form({"count": "three"})


@pytest.mark.anyio
async def test_grammar_checker_success_keeps_input_for_reference():
    payload = {
        "correctedText": "She goes to school.",
        "errors": [{"originalPhrase": "go", "suggestion": "goes", "explanation": "Agreement."}],
    }
    gateway = FakeGateway(f"```json\n{json.dumps(payload)}\n```")
    panel = GrammarCheckerPanel(gateway)
    panel.apply_form({"text": "She go to school."})

    outcome = await panel.submit()

    assert outcome.kind == OutcomeKind.SUCCESS
    assert panel.result.corrected_text == "She goes to school."
    assert panel.result.errors[0].suggestion == "goes"
    assert panel.input_text == "She go to school."
    assert panel.error_message is None


@pytest.mark.anyio
async def test_grammar_checker_refusal_and_parse_error():
    gateway = FakeGateway(json.dumps({"error": grammar_checker.REFUSAL_MESSAGE}))
    panel = GrammarCheckerPanel(gateway)
    panel.apply_form({"text": "Bonjour tout le monde"})

    outcome = await panel.submit()
    assert outcome.kind == OutcomeKind.REFUSAL
    assert panel.error_message == grammar_checker.REFUSAL_MESSAGE

    gateway.reply = "not json at all"
    outcome = await panel.submit()
    assert outcome.kind == OutcomeKind.PARSE_ERROR
    assert "Failed to parse AI response" in panel.error_message
    assert panel.result is None


@pytest.mark.anyio
async def test_grammar_checker_transport_error_prefix():
    panel = GrammarCheckerPanel(FakeGateway(TransportOrModelError("timed out")))
    panel.apply_form({"text": "Some text."})

    await panel.submit()

    assert panel.error_message == "API Error: timed out"
    assert panel.status == PanelStatus.FAILED


@pytest.mark.anyio
async def test_image_prompt_splits_variations():
    gateway = FakeGateway("A fluffy cat in a velvet wizard hat, candlelight\n\nshort\n\nA watercolor cat, soft pastel tones")
    panel = ImagePromptPanel(gateway)
    panel.apply_form({"text": "cat wizard", "count": "3"})

    await panel.submit()

    assert panel.result == [
        "A fluffy cat in a velvet wizard hat, candlelight",
        "short",
        "A watercolor cat, soft pastel tones",
    ]
    assert panel.visible_prompts == [
        "A fluffy cat in a velvet wizard hat, candlelight",
        "A watercolor cat, soft pastel tones",
    ]
    assert "generate exactly 3 distinct image prompt variations" in gateway.last_prompt


@pytest.mark.anyio
async def test_image_prompt_empty_response():
    panel = ImagePromptPanel(FakeGateway("   "))
    panel.apply_form({"text": "cat wizard"})

    outcome = await panel.submit()

    assert outcome.kind == OutcomeKind.EMPTY
    assert panel.error_message == "The AI returned an empty response."
    assert panel.result is None
