from typing_extensions import *

from automaton import State, SuffixCountAutomaton
from io_utils import load_from_file, parse_alphabet, parse_count, parse_word
from specification import InvalidSymbol, Specification


def rejection_reasons(automaton: SuffixCountAutomaton, word: str) -> List[str]:
    """
    Explain why a word is rejected, by comparing the final state with the
    target values. Returns an empty list for accepted words.
    """
    try:
        final = automaton.final_state(word)
    except InvalidSymbol as e:
        return [f"symbol '{e.symbol}' is not in the alphabet"]

    if automaton.is_accepting(final):
        return []

    reasons = []
    suffix_length = len(automaton.target_string)
    if final.progress != suffix_length:
        reasons.append(
            f"required trailing substring '{automaton.target_string}' not reached: "
            f"progress {final.progress}/{suffix_length}"
        )
    if final.count != automaton.required_count:
        occurred = automaton.count_target_chars(word)
        reasons.append(
            f"symbol '{automaton.target_char}' occurred {occurred} times, "
            f"required {automaton.required_count}"
        )
    return reasons


def describe_state(automaton: SuffixCountAutomaton, state: State) -> str:
    marks = []
    if state == automaton.start_state():
        marks.append("start")
    if automaton.is_accepting(state):
        marks.append("accepting")
    if automaton.is_overflow(state):
        marks.append("overflow")
    label = automaton.format_state(state)
    return f"{label} [{', '.join(marks)}]" if marks else label


def print_transition_table(automaton: SuffixCountAutomaton):
    states = automaton.all_states()
    labels = {s: automaton.format_state(s) for s in states}
    width = max(len(label) for label in labels.values()) + 4

    header = "".ljust(width) + "".join(sym.ljust(width) for sym in automaton.alphabet)
    print(header)
    for state in states:
        flags = ""
        if state == automaton.start_state():
            flags += ">"
        if automaton.is_accepting(state):
            flags += "*"
        if automaton.is_overflow(state):
            flags += "!"
        row = (flags + " " + labels[state]).ljust(width)
        for symbol in automaton.alphabet:
            row += labels[automaton.step(state, symbol)].ljust(width)
        print(row)
    print("\n  > start   * accepting   ! overflow\n")


def print_trace(automaton: SuffixCountAutomaton, word: str):
    steps = automaton.trace(word)
    print(f"  start: {automaton.format_state(automaton.start_state())}")
    for i, (src, symbol, tgt) in enumerate(steps, 1):
        print(
            f"  {i:>3}. {automaton.format_state(src)} --{symbol}--> "
            f"{describe_state(automaton, tgt)}"
        )
    if len(steps) < len(word):
        print(f"  stopped at position {len(steps) + 1}: '{word[len(steps)]}'")


def main():
    """Simple interactive terminal for suffix/count languages."""
    automata: Dict[str, SuffixCountAutomaton] = {}

    print("Suffix/Count DEA Terminal - Type 'help' for commands\n")

    while True:
        try:
            command = input("> ").strip()
            if not command:
                continue

            parts = command.split()
            cmd = parts[0].lower()

            # Exit
            if cmd in ["exit", "quit"]:
                break

            # Help
            elif cmd == "help":
                print(
                    """
Commands:
  LOADING:
    load <file>                  - Load language descriptions from file
    define <name> <alphabet> <suffix> <char> <count>
                                 - Define a language (suffix 'eps' for none)
    list                         - List all loaded automata

  AUTOMATA OPERATIONS:
    show <name>                  - Show automaton info
    states <name>                - List all states
    table <name>                 - Print the transition table
    graph <name>                 - Visualize automaton
    test <name> <word>           - Test if word is accepted ('eps' for the empty word)
    trace <name> <word>          - Show every transition taken

  GENERAL:
    delete <name>                - Delete item
    clear                        - Clear all
    exit                         - Exit
"""
                )

            # Load
            elif cmd == "load":
                if len(parts) < 2:
                    print("Usage: load <filename>")
                    continue
                try:
                    loaded = load_from_file(parts[1])
                    for name, spec in loaded.items():
                        automata[name] = SuffixCountAutomaton(spec)
                    if loaded:
                        print(f"Loaded {len(loaded)} automata: {', '.join(loaded.keys())}")
                    else:
                        print("No items loaded")
                except Exception as e:
                    print(f"Error: {e}")

            # Define inline
            elif cmd == "define":
                if len(parts) < 6:
                    print("Usage: define <name> <alphabet> <suffix> <char> <count>")
                    continue
                try:
                    spec = Specification(
                        alphabet=tuple(parse_alphabet(parts[2])),
                        target_string=parse_word(parts[3]),
                        target_char=parts[4],
                        required_count=parse_count(parts[5]),
                    )
                    automata[parts[1]] = SuffixCountAutomaton(spec)
                    print(f"Created: {parts[1]}")
                except Exception as e:
                    print(f"Error: {e}")

            # List
            elif cmd == "list":
                if automata:
                    print("Automata:")
                    for name, aut in sorted(automata.items()):
                        print(f"  {name}: {aut!r}, {len(aut.all_states())} states")
                else:
                    print("Nothing loaded")

            # Delete item
            elif cmd == "delete":
                if len(parts) < 2:
                    print("Usage: delete <name>")
                elif parts[1] in automata:
                    del automata[parts[1]]
                    print(f"Deleted: {parts[1]}")
                else:
                    print(f"Not found: {parts[1]}")

            # Clear all
            elif cmd == "clear":
                automata.clear()
                print("Cleared all")

            elif cmd in ["show", "states", "table", "graph", "test", "trace"]:
                needs_word = cmd in ["test", "trace"]
                if len(parts) < (3 if needs_word else 2):
                    print(f"Usage: {cmd} <name>{' <word>' if needs_word else ''}")
                    continue
                if parts[1] not in automata:
                    print(f"Automaton not found: {parts[1]}")
                    continue
                aut = automata[parts[1]]
                word = parse_word(parts[2]) if needs_word else ""

                # Show automaton info
                if cmd == "show":
                    print(f"\n{parts[1]}:")
                    print(f"  Alphabet: {', '.join(aut.alphabet)}")
                    print(f"  Suffix: {aut.target_string or 'ε'}")
                    print(f"  Counted symbol: {aut.target_char} x {aut.required_count}")
                    print(f"  States: {len(aut.all_states())}")
                    print(f"  Start: {aut.format_state(aut.start_state())}")
                    accepting = sorted(aut.accepting_states(), key=aut.state_number)
                    print(f"  Accepting: {', '.join(aut.format_state(s) for s in accepting)}")
                    print(f"  Transitions: {len(aut.all_transitions())}\n")

                elif cmd == "states":
                    for state in aut.all_states():
                        prefix = aut.matched_prefix(state) or "ε"
                        print(f"  {describe_state(aut, state)} matched: {prefix}")

                elif cmd == "table":
                    print_transition_table(aut)

                # Graph automaton
                elif cmd == "graph":
                    try:
                        aut.to_graphviz(filename=parts[1], view=True)
                        print(f"Created: {parts[1]}.png")
                    except Exception as e:
                        print(f"Error: {e}")

                # Test word on automaton
                elif cmd == "test":
                    try:
                        accepted = aut.accepts(word)
                    except InvalidSymbol:
                        accepted = False
                    if accepted:
                        print("ACCEPTED")
                    else:
                        print("REJECTED: " + "; ".join(rejection_reasons(aut, word)))

                elif cmd == "trace":
                    print_trace(aut, word)

            else:
                print(f"Unknown command: {cmd}")

        except KeyboardInterrupt:
            print("\nUse 'exit' to quit")
        except EOFError:
            break
        except Exception as e:
            print(f"Error: {e}")

    print("Goodbye!")


if __name__ == "__main__":
    main()
