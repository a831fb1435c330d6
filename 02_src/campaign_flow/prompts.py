"""Modal prompt contract and its scripted and console implementations."""

import re
import sys
from collections import deque
from typing import Any, Deque, Iterable, Optional, Sequence, TextIO

from typing_extensions import Protocol

from .graph_model import WaitParams
from .labels import ACTION_LABELS, WAIT_ACTION

_TIME_PATTERN = re.compile(r"^([01]\d|2[0-3]):[0-5]\d$")


class ModalPrompts(Protocol):
    """Synchronous input collectors. ``None`` / ``False`` mean the user cancelled."""

    def choose_action(self, choices: Sequence[str]) -> Optional[str]:
        ...

    def wait_params(self, defaults: WaitParams) -> Optional[WaitParams]:
        ...

    def confirm_delete(self, node_id: int) -> bool:
        ...


class ScriptedPrompts:
    """Answers prompts from pre-queued responses, in order per prompt type."""

    def __init__(
        self,
        actions: Iterable[Optional[str]] = (),
        waits: Iterable[Optional[WaitParams]] = (),
        confirms: Iterable[bool] = (),
    ) -> None:
        self._actions: Deque[Optional[str]] = deque(actions)
        self._waits: Deque[Optional[WaitParams]] = deque(waits)
        self._confirms: Deque[bool] = deque(confirms)
        self.asked: list = []

    def choose_action(self, choices: Sequence[str]) -> Optional[str]:
        self.asked.append(("choose_action", tuple(choices)))
        return self._pop(self._actions, "choose_action")

    def wait_params(self, defaults: WaitParams) -> Optional[WaitParams]:
        self.asked.append(("wait_params", defaults))
        return self._pop(self._waits, "wait_params")

    def confirm_delete(self, node_id: int) -> bool:
        self.asked.append(("confirm_delete", node_id))
        return bool(self._pop(self._confirms, "confirm_delete"))

    @staticmethod
    def _pop(queue: Deque[Any], prompt: str) -> Any:
        if not queue:
            raise RuntimeError(f"No scripted answer left for prompt '{prompt}'")
        return queue.popleft()


class ConsolePrompts:
    """Text prompts over a pair of streams. An empty answer cancels."""

    def __init__(self, stdin: Optional[TextIO] = None, stdout: Optional[TextIO] = None) -> None:
        self._in = stdin or sys.stdin
        self._out = stdout or sys.stdout

    def choose_action(self, choices: Sequence[str]) -> Optional[str]:
        for index, choice in enumerate(choices, start=1):
            title = "Wait" if choice == WAIT_ACTION else ACTION_LABELS.get(choice, choice)
            self._out.write(f"  {index}. {title}\n")
        while True:
            answer = self._ask("Action (number, empty to close): ")
            if answer is None:
                return None
            if answer.isdecimal() and 1 <= int(answer) <= len(choices):
                return choices[int(answer) - 1]
            if answer in choices:
                return answer
            self._out.write(f"Unknown action: {answer}\n")

    def wait_params(self, defaults: WaitParams) -> Optional[WaitParams]:
        days: Optional[int] = None
        while days is None:
            answer = self._ask(f"Days [{defaults.days}]: ")
            if answer is None:
                return None
            if answer == "-":
                days = defaults.days
            elif answer.isdecimal():
                days = int(answer)
            else:
                self._out.write("Days must be a whole number.\n")

        while True:
            answer = self._ask(f"Time HH:MM [{defaults.time}]: ")
            if answer is None:
                return None
            if answer == "-":
                return WaitParams(days=days, time=defaults.time)
            if _TIME_PATTERN.match(answer):
                return WaitParams(days=days, time=answer)
            self._out.write("Time must look like 09:30.\n")

    def confirm_delete(self, node_id: int) -> bool:
        answer = self._ask(f"Are you sure you want to delete node {node_id}? [y/N]: ")
        return (answer or "").lower() in ("y", "yes")

    def _ask(self, prompt: str) -> Optional[str]:
        self._out.write(prompt)
        self._out.flush()
        line = self._in.readline()
        if not line:
            return None
        answer = line.strip()
        return answer or None
