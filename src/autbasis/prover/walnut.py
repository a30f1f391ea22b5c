"""Oracle backed by the Walnut automatic-sequence prover.

Each query runs the prover once:
1. Write the automaton to ``Word Automata Library/LL.txt``
2. Feed ``eval <name> "<predicate>":`` and ``exit:`` on stdin
3. Read the first line of ``Result/<name>.txt``
4. Remove the result files Walnut left behind
"""

import logging
import os
import subprocess
from typing import List, Optional

from autbasis.automaton.dfa import Automaton
from autbasis.config import DEFAULT_WALNUT_COMMAND, Config
from autbasis.exceptions import OracleError
from autbasis.prover.oracle import Oracle
from autbasis.prover.queries import AUTOMATON_NAME, Query


logger = logging.getLogger(__name__)

LIBRARY_DIR = "Word Automata Library"
RESULT_DIR = "Result"


class WalnutOracle(Oracle):
    """Run Walnut as a subprocess for every query."""

    def __init__(
        self,
        walnut_dir: str,
        command: Optional[List[str]] = None,
        keep_logs: bool = False,
        timeout: Optional[float] = None,
    ):
        self.walnut_dir = walnut_dir
        self.command = list(command or DEFAULT_WALNUT_COMMAND)
        self.keep_logs = keep_logs
        self.timeout = timeout

    @classmethod
    def from_config(cls, config: Config) -> "WalnutOracle":
        if config.walnut_dir is None:
            raise ValueError("walnut_dir is not configured")
        return cls(config.walnut_dir, config.walnut_command, config.keep_logs)

    @property
    def automaton_path(self) -> str:
        return os.path.join(self.walnut_dir, LIBRARY_DIR, f"{AUTOMATON_NAME}.txt")

    def result_path(self, name: str, suffix: str = ".txt") -> str:
        return os.path.join(self.walnut_dir, RESULT_DIR, name + suffix)

    def write_automaton(self, automaton: Automaton) -> None:
        os.makedirs(os.path.dirname(self.automaton_path), exist_ok=True)
        with open(self.automaton_path, "w", encoding="utf-8") as f:
            f.write(automaton.to_walnut())

    def holds(self, automaton: Automaton, query: Query) -> bool:
        self.write_automaton(automaton)
        logger.info("Walnut: %s", query.command())

        try:
            completed = subprocess.run(
                self.command,
                input=f"{query.command()}\nexit:\n",
                cwd=self.walnut_dir,
                stdout=subprocess.PIPE,
                stderr=subprocess.PIPE,
                universal_newlines=True,
                timeout=self.timeout,
            )
        except (OSError, subprocess.SubprocessError) as e:
            raise OracleError(f"could not run Walnut: {e}") from e

        result_file = self.result_path(query.name)
        if not os.path.exists(result_file):
            raise OracleError(
                f"Walnut produced no result for {query.name} "
                f"(exit status {completed.returncode}): {completed.stderr.strip()}"
            )
        try:
            with open(result_file, encoding="utf-8") as f:
                answer = f.readline().strip()
        finally:
            self._remove_results(query.name)

        if answer not in ("true", "false"):
            raise OracleError(f"unexpected Walnut answer {answer!r} for {query.name}")
        return answer == "true"

    def _remove_results(self, name: str) -> None:
        suffixes = [".txt", ".gv"]
        if not self.keep_logs:
            suffixes.append("_log.txt")
        for suffix in suffixes:
            path = self.result_path(name, suffix)
            if os.path.exists(path):
                os.remove(path)

    def close(self) -> None:
        if os.path.exists(self.automaton_path):
            os.remove(self.automaton_path)
