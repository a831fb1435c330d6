"""Console session for building a campaign flow."""

import argparse
import json
import shlex
import sys
from typing import Any, Dict, List, Optional, TextIO

from .errors import FlowGraphError
from .flow_builder import FlowBuilder
from .logs import configure_logging
from .prompts import ConsolePrompts
from .settings import LOG_LEVELS, FlowSettings, load_settings
from .surface import Canvas

HELP_TEXT = """Commands:
  add                     open the action menu
  wait                    add a wait step
  delete <node>           delete a node (asks for confirmation)
  unlink <edge>           delete an edge
  connect <src> <dst>     connect two nodes
  move <node> <x> <y>     reposition a node
  show                    print the flow as JSON
  quit                    print the flow and exit
"""


class FlowSession:
    def __init__(
        self,
        settings: Optional[FlowSettings] = None,
        stdin: Optional[TextIO] = None,
        stdout: Optional[TextIO] = None,
    ) -> None:
        self.stdin = stdin or sys.stdin
        self.stdout = stdout or sys.stdout
        self.canvas = Canvas(FlowBuilder(settings))
        self.prompts = ConsolePrompts(self.stdin, self.stdout)

    def run(self) -> int:
        self.stdout.write(HELP_TEXT)
        while True:
            self.stdout.write("> ")
            self.stdout.flush()
            line = self.stdin.readline()
            if not line:
                break
            try:
                words = shlex.split(line)
            except ValueError as error:
                self.stdout.write(f"Bad arguments: {error}.\n")
                continue
            if not words:
                continue
            if words[0] in ("quit", "exit"):
                break
            try:
                self.dispatch(words[0], words[1:])
            except FlowGraphError as error:
                self.stdout.write(f"Error: {error}\n")
            except (ValueError, IndexError):
                self.stdout.write(f"Bad arguments for '{words[0]}'.\n")
        self.show()
        return 0

    def dispatch(self, command: str, args: List[str]) -> None:
        if command == "add":
            self._report(self.canvas.on_add_action(self.prompts))
        elif command == "wait":
            tail = self.canvas.builder.tail_node_id
            if self.canvas.builder.store.get_node(tail).has_add_action:
                self._report(self.canvas.on_continuation_clicked(tail, self.prompts))
            else:
                self._report(self.canvas.builder.run_add_wait(self.prompts))
        elif command == "delete":
            deleted = self.canvas.on_node_delete_requested(int(args[0]), self.prompts)
            self.stdout.write("Deleted.\n" if deleted else "Kept.\n")
        elif command == "unlink":
            self.canvas.on_edge_delete_requested(args[0])
        elif command == "connect":
            edge_id = self.canvas.on_connect(int(args[0]), int(args[1]))
            self.stdout.write(f"Connected: {edge_id}\n")
        elif command == "move":
            self.canvas.on_nodes_repositioned({int(args[0]): (float(args[1]), float(args[2]))})
        elif command == "show":
            self.show()
        else:
            self.stdout.write(HELP_TEXT)

    def show(self) -> Dict[str, Any]:
        payload = self.canvas.to_json()
        self.stdout.write(json.dumps(payload, ensure_ascii=False, indent=2) + "\n")
        self.stdout.write(
            f"Counts: nodes={len(payload['nodes'])} edges={len(payload['edges'])}\n"
        )
        return payload

    def _report(self, result: Any) -> None:
        if result is None:
            self.stdout.write("Cancelled.\n")
        else:
            self.stdout.write(f"Added node {result.node_id}.\n")


def parse_args(argv: List[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Build a campaign outreach flow interactively.")
    parser.add_argument(
        "--log-level",
        default=None,
        type=str.upper,
        choices=LOG_LEVELS,
        help="Override CAMPAIGN_FLOW_LOG_LEVEL.",
    )
    return parser.parse_args(argv)


def main(argv: List[str] | None = None) -> int:
    args = parse_args(argv)
    settings = load_settings()
    configure_logging(args.log_level or settings.log_level)
    return FlowSession(settings).run()


if __name__ == "__main__":
    raise SystemExit(main())
