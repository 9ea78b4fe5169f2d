from collections import defaultdict
from dataclasses import dataclass
from typing_extensions import *

from graphviz import Digraph

from specification import InvalidSymbol, Specification, validate


@dataclass(frozen=True)
class State:
    """
    One state of the automaton.

    progress:
        length of the longest prefix of the target string that is also a
        suffix of the input read so far (0 .. len(target_string))
    count:
        occurrences of the target symbol so far, saturating at
        required_count + 1
    """

    progress: int
    count: int


class Transition(NamedTuple):
    source: State
    symbol: str
    target: State


def failure_function(pattern: str) -> List[int]:
    """KMP prefix function: fail[i] is the longest proper border of pattern[:i + 1]."""
    fail = [0] * len(pattern)
    k = 0
    for i in range(1, len(pattern)):
        while k > 0 and pattern[i] != pattern[k]:
            k = fail[k - 1]
        if pattern[i] == pattern[k]:
            k += 1
        fail[i] = k
    return fail


class SuffixCountAutomaton:
    """
    Complete DFA for the language described by a Specification.

    The state space is the product of suffix progress and a saturating symbol
    counter. It is built once in the constructor; every evaluation afterwards
    only reads the precomputed table.
    """

    def __init__(self, spec: Specification):
        self._spec = validate(spec)

        self._fail = failure_function(spec.target_string)
        self._width = spec.required_count + 2

        self._states: List[State] = [
            State(progress, count)
            for progress in range(spec.suffix_length + 1)
            for count in range(self._width)
        ]
        self._start = State(0, 0)

        # table[progress][count] -> {symbol: State}
        self._table: List[List[Dict[str, State]]] = [
            [{} for _ in range(self._width)]
            for _ in range(spec.suffix_length + 1)
        ]
        self._numbers: List[List[int]] = [
            [0] * self._width for _ in range(spec.suffix_length + 1)
        ]

        for number, state in enumerate(self._states):
            self._numbers[state.progress][state.count] = number
            row = self._table[state.progress][state.count]
            for symbol in spec.alphabet:
                row[symbol] = self._next_state(state, symbol)

        self._accepting = frozenset(
            state for state in self._states if self._is_final(state)
        )

    @classmethod
    def from_config(
        cls,
        alphabet: Iterable[str],
        target_string: str,
        target_char: str,
        required_count: int,
    ) -> "SuffixCountAutomaton":
        return cls(
            Specification(
                alphabet=tuple(alphabet),
                target_string=target_string,
                target_char=target_char,
                required_count=required_count,
            )
        )

    # -------------------------------------------------------------------------
    # Construction
    # -------------------------------------------------------------------------

    def _next_progress(self, progress: int, symbol: str) -> int:
        target = self._spec.target_string
        if not target:
            return 0

        # A full match keeps its longest border, so overlapping
        # occurrences ("aa" inside "aaa") are still recognised.
        if progress == len(target):
            progress = self._fail[progress - 1]

        while progress > 0 and symbol != target[progress]:
            progress = self._fail[progress - 1]

        if symbol == target[progress]:
            return progress + 1
        return 0

    def _next_count(self, count: int, symbol: str) -> int:
        if symbol == self._spec.target_char:
            return min(count + 1, self._spec.overflow_count)
        return count

    def _next_state(self, state: State, symbol: str) -> State:
        return State(
            self._next_progress(state.progress, symbol),
            self._next_count(state.count, symbol),
        )

    def _is_final(self, state: State) -> bool:
        return (
            state.progress == self._spec.suffix_length
            and state.count == self._spec.required_count
        )

    def _check_state(self, state: State):
        if not (
            0 <= state.progress <= self._spec.suffix_length
            and 0 <= state.count < self._width
        ):
            raise ValueError(f"State {state} is not part of this automaton")

    # -------------------------------------------------------------------------
    # Evaluation
    # -------------------------------------------------------------------------

    def step(self, state: State, symbol: str) -> State:
        """Single transition; raises InvalidSymbol for foreign symbols."""
        self._check_state(state)
        row = self._table[state.progress][state.count]
        if symbol not in row:
            raise InvalidSymbol(symbol)
        return row[symbol]

    def final_state(self, word: str) -> State:
        state = self._start
        for symbol in word:
            row = self._table[state.progress][state.count]
            if symbol not in row:
                raise InvalidSymbol(symbol)
            state = row[symbol]
        return state

    def accepts(self, word: str) -> bool:
        """
        Check if the automaton accepts a word.
        Raises InvalidSymbol on the first symbol outside the alphabet.
        """
        return self.final_state(word) in self._accepting

    def trace(self, word: str) -> List[Transition]:
        """
        Transitions taken while reading word.

        Unlike accepts, a symbol outside the alphabet does not raise: the
        trace simply ends before it, so a partial run can still be shown.
        """
        steps: List[Transition] = []
        state = self._start
        for symbol in word:
            row = self._table[state.progress][state.count]
            if symbol not in row:
                break
            target = row[symbol]
            steps.append(Transition(state, symbol, target))
            state = target
        return steps

    # -------------------------------------------------------------------------
    # Introspection
    # -------------------------------------------------------------------------

    @property
    def specification(self) -> Specification:
        return self._spec

    @property
    def alphabet(self) -> Tuple[str, ...]:
        return self._spec.alphabet

    @property
    def target_string(self) -> str:
        return self._spec.target_string

    @property
    def target_char(self) -> str:
        return self._spec.target_char

    @property
    def required_count(self) -> int:
        return self._spec.required_count

    def start_state(self) -> State:
        return self._start

    def all_states(self) -> List[State]:
        return list(self._states)

    def accepting_states(self) -> FrozenSet[State]:
        return self._accepting

    def is_accepting(self, state: State) -> bool:
        return state in self._accepting

    def is_overflow(self, state: State) -> bool:
        """True once the target symbol occurred more often than required."""
        return state.count > self._spec.required_count

    def state_number(self, state: State) -> int:
        self._check_state(state)
        return self._numbers[state.progress][state.count]

    def matched_prefix(self, state: State) -> str:
        """Part of the target string already matched at the end of the input."""
        self._check_state(state)
        return self._spec.target_string[: state.progress]

    def format_state(self, state: State) -> str:
        number = self.state_number(state)
        return (
            f"q{number}(progress: {state.progress}/{self._spec.suffix_length}, "
            f"count: {state.count})"
        )

    def all_transitions(self) -> List[Transition]:
        """Every edge of the table, by state number and then alphabet order."""
        return [
            Transition(state, symbol, target)
            for state in self._states
            for symbol, target in self._table[state.progress][state.count].items()
        ]

    # Reference checks without the automaton --------------------------------

    def ends_with_target(self, word: str) -> bool:
        return word.endswith(self._spec.target_string)

    def count_target_chars(self, word: str) -> int:
        return word.count(self._spec.target_char)

    def __repr__(self):
        return (
            f"SuffixCountAutomaton(alphabet={list(self.alphabet)}, "
            f"target_string={self.target_string!r}, "
            f"target_char={self.target_char!r}, "
            f"required_count={self.required_count})"
        )

    # -------------------------------------------------------------------------
    # Visualization
    # -------------------------------------------------------------------------

    def _state_id(self, state: State) -> str:
        return f"q{self.state_number(state)}"

    def to_graphviz(
        self, filename: str = "automaton", view: bool = True, render: bool = True
    ) -> Digraph:
        """Generate a Graphviz visualization for this automaton."""
        title = (
            f"ends with '{self.target_string or 'ε'}', "
            f"{self.required_count} x '{self.target_char}'"
        )

        dot = Digraph(
            name="DEA",
            format="png",
            graph_attr={
                "rankdir": "LR",
                "splines": "true",
                "nodesep": "0.8",
                "ranksep": "1.2",
                "label": title,
                "labelloc": "t",
                "fontsize": "14",
                "fontname": "Arial",
                "bgcolor": "white",
                "pad": "0.5",
                "dpi": "300",
            },
            node_attr={
                "shape": "circle",
                "fontsize": "12",
                "fontname": "Arial",
                "width": "0.9",
                "height": "0.9",
                "fixedsize": "true",
                "style": "filled",
                "fillcolor": "lightblue",
                "color": "black",
                "penwidth": "2",
            },
            edge_attr={
                "fontsize": "12",
                "fontname": "Arial",
                "arrowsize": "0.8",
                "penwidth": "1.5",
                "color": "black",
            },
        )

        dot.node("__start__", shape="point", width="0.01", style="invis")

        for state in self._states:
            node_id = self._state_id(state)
            label = f"{node_id}\n{state.progress}/{len(self.target_string)}, {state.count}"
            if self.is_accepting(state):
                dot.node(
                    node_id,
                    label=label,
                    shape="doublecircle",
                    fillcolor="lightgreen",
                    peripheries="2",
                )
            elif self.is_overflow(state):
                dot.node(node_id, label=label, fillcolor="lightpink", color="crimson")
            else:
                dot.node(node_id, label=label)

        dot.edge("__start__", self._state_id(self._start), penwidth="2")

        edges = defaultdict(list)
        for src, sym, tgt in self.all_transitions():
            edges[(src, tgt)].append(sym)

        for (src, tgt), symbols in edges.items():
            label = ", ".join(symbols)
            src_id = self._state_id(src)
            tgt_id = self._state_id(tgt)

            if src == tgt:
                dot.edge(src_id, tgt_id, label=label, headport="n", tailport="n")
            else:
                dot.edge(src_id, tgt_id, label=label)

        if render:
            dot.render(filename, view=view, cleanup=True)
        return dot
