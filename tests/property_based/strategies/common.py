# Copyright 2025 CrownOps Engineering
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.
"""Shared Hypothesis strategies for property-based tests."""

from __future__ import annotations

from hypothesis import strategies as st

__all__ = [
    "code_lines",
    "plain_code_line",
    "pragma_free_sources",
]

_IDENTIFIER = st.from_regex(r"[a-z][a-zA-Z0-9_]{0,8}", fullmatch=True)


def plain_code_line() -> st.SearchStrategy[str]:
    """Return a strategy that yields single JavaScript-like statements without pragmas."""
    statement = st.one_of(
        st.builds(lambda name, value: f"const {name} = {value};", _IDENTIFIER, st.integers(0, 999)),
        st.builds(lambda name: f"{name}();", _IDENTIFIER),
        st.builds(lambda name: f"// {name}", _IDENTIFIER),
        st.just(""),
        st.just("}"),
    )
    return st.builds(lambda indent, body: f"{' ' * indent}{body}", st.integers(0, 4), statement)


def code_lines(min_size: int = 1, max_size: int = 30) -> st.SearchStrategy[list[str]]:
    """Return a strategy that yields lists of pragma-free source lines."""
    return st.lists(plain_code_line(), min_size=min_size, max_size=max_size)


def pragma_free_sources(max_lines: int = 30) -> st.SearchStrategy[str]:
    """Strategy emitting whole files that may carry line pragmas but never block pragmas.

    Args:
        max_lines: Maximum number of lines in the emitted text.

    Returns:
        Hypothesis strategy producing newline-joined source text.
    """
    line_with_pragma = st.one_of(
        plain_code_line(),
        st.builds(lambda line: f"{line} // flow-uncovered-line", plain_code_line()),
        st.just("// flow-next-uncovered-line"),
        st.just("/* flow-uncovered-next-line */"),
    )
    return st.lists(line_with_pragma, max_size=max_lines).map("\n".join)
