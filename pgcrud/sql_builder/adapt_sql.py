"""Placeholder adaptation of $n SQL for drivers with another bind style.

Only a ``$n`` that does not follow a word character or another ``$`` is a
placeholder, so identifiers such as ``col$1`` are left alone. Trusted
fragments (``conflict_action``, identifiers) are otherwise rewritten like the
rest of the text: a bare ``$1`` inside a dollar-quoted body is treated as a
placeholder too.
"""

import re
from typing import Any, Dict, List, Sequence, Tuple, Union

_rx_pos = re.compile(r'(?<![\w$])\$(\d+)\b')


def _value(params: Sequence[Any], n: str) -> Any:
    idx = int(n) - 1
    if idx < 0 or idx >= len(params):
        raise ValueError(f'No parameter for placeholder ${n} ({len(params)} given)')
    return params[idx]


def adapt_sql(sql: str, params: Sequence[Any], style: str) -> Tuple[str, Union[Dict[str, Any], List[Any]]]:
    """Adapt $n placeholders and positional params to ``style``.

    ``numeric`` keeps $n as-is, ``named`` produces :pN binds with a dict
    (SQLAlchemy ``text()``), ``format`` produces %s binds with the values in
    placeholder order (psycopg2).
    """
    s = style.lower()
    if s == 'numeric':
        return sql, list(params)
    if s == 'named':
        named = {}
        def repl(m: re.Match) -> str:
            named[f'p{m.group(1)}'] = _value(params, m.group(1))
            return f':p{m.group(1)}'
        return _rx_pos.sub(repl, sql), named
    if s == 'format':
        ordered = []
        def repl_fmt(m: re.Match) -> str:
            ordered.append(_value(params, m.group(1)))
            return '%s'
        return _rx_pos.sub(repl_fmt, sql.replace('%', '%%')), ordered
    raise ValueError(f'Unknown placeholder style: {style}')
