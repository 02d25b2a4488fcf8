"""Question/answer contract for the interactive layer, plus a scripted fake.

The interactive prompt layer that gathers raw answers lives outside this
library. Anything with an async ``prompt(questions, answers=None)`` method
can feed answers in; ``FakePrompter`` is a scripted implementation that also
checks each question's validator against known-good and known-bad answers.
"""

from collections.abc import Callable
from collections.abc import Iterable
from collections.abc import Mapping
from dataclasses import dataclass
from dataclasses import field
from typing import Any
from typing import Protocol

from .exceptions import PromptError
from .json_entity import JSONEntity

Validator = Callable[[Any], "bool | str"]


@dataclass
class Question:
    """A single question for the answer source.

    Attributes:
        name: Key of the answer in the result mapping
        type: Kind of prompt ("input", "confirm", "list", ...)
        message: Text shown to the user
        default: Value offered when the user gives none
        validate: Returns True to accept an answer, or an error message
        ask_answered: Ask even when a prior answer exists
    """

    name: str
    type: str = "input"
    message: str = ""
    default: Any = None
    validate: Validator | None = None
    ask_answered: bool = False


class Prompter(Protocol):
    """Anything able to answer a list of questions."""

    async def prompt(
        self, questions: Iterable[Question], answers: Mapping[str, Any] | None = None
    ) -> dict[str, Any]: ...


@dataclass
class FakeAnswers:
    """Scripted answers for one question.

    Attributes:
        answer: Final answer returned for the question
        pass_answers: Answers the question's validator must accept
        fail_answers: Answers the question's validator must reject
    """

    answer: Any
    pass_answers: list[Any] = field(default_factory=list)
    fail_answers: list[Any] = field(default_factory=list)


class FakePrompter:
    """Prompter returning scripted answers, for tests and dry runs."""

    def __init__(self) -> None:
        self._answers: dict[str, FakeAnswers] = {}

    def set(self, name: str, answers: FakeAnswers) -> None:
        self._answers[name] = answers

    def clear(self) -> None:
        self._answers.clear()

    async def prompt(
        self, questions: Iterable[Question], answers: Mapping[str, Any] | None = None
    ) -> dict[str, Any]:
        """Answer each question from the script.

        A question whose name already has an answer, either from ``answers``
        or from an earlier question in this call, is skipped unless it sets
        ask_answered.

        Raises:
            PromptError: If a question has no scripted answer, or its validator
                disagrees with the scripted pass/fail answers
        """
        results = dict(answers or {})
        for question in questions:
            if question.name in results and not question.ask_answered:
                continue
            results[question.name] = self._answer(question)
        return results

    def _answer(self, question: Question) -> Any:
        fake = self._answers.get(question.name)
        if fake is None:
            raise PromptError(f'No fake answers for question "{question.name}"!')

        if question.validate is None:
            if fake.pass_answers or fake.fail_answers:
                raise PromptError(
                    f'Validation test answers are present for a question with no validate method: "{question.name}"'
                )
            return fake.answer

        for candidate in fake.fail_answers:
            if question.validate(candidate) is True:
                raise PromptError(
                    f'validation should have failed on question {question.name} with answer "{candidate}"'
                )
        for candidate in fake.pass_answers:
            if question.validate(candidate) is not True:
                raise PromptError(
                    f'validation should have passed on question {question.name} with answer "{candidate}"'
                )
        if question.validate(fake.answer) is not True:
            raise PromptError(
                f'validation should have passed on question {question.name} with final answer "{fake.answer}"'
            )
        return fake.answer


def entity_validator(entity_cls: type[JSONEntity], message: str | None = None) -> Validator:
    """Build a question validator accepting only values of an entity's JSON shape."""
    error = message or f"Not a valid {entity_cls.__name__}"

    def validate(value: Any) -> bool | str:
        return True if entity_cls.is_json(value) else error

    return validate
