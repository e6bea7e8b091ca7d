# -*- coding: utf-8 -*-
"""Expression evaluation for numeric scene fields.

Scene files may write any number as a string ("2/3", "sqrt(2)", "s*3"). The
string is parsed by SymPy against a small whitelist plus the scene
parameters; Python ``eval`` is never used.
"""

from __future__ import annotations

import math
import numbers
from typing import Any, Dict, Optional, Tuple

import sympy as sp


_ALLOWED_FUNCS: Dict[str, Any] = {
    "sin": sp.sin,
    "cos": sp.cos,
    "tan": sp.tan,
    "atan2": sp.atan2,
    "sqrt": sp.sqrt,
    "abs": sp.Abs,
    "min": sp.Min,
    "max": sp.Max,
    "pi": sp.pi,
    "E": sp.E,
}


def eval_param_expression(expr: Any, params: Dict[str, float]) -> Tuple[Optional[float], Optional[str]]:
    """Evaluate a number or an expression string.

    Returns (value, error_message). If evaluation fails, value is None.
    """
    if isinstance(expr, bool):
        return None, f"Not a number: {expr!r}"
    if isinstance(expr, numbers.Real):
        val = float(expr)
        if not math.isfinite(val):
            return None, f"Not a finite number: {expr!r}"
        return val, None
    if not isinstance(expr, str):
        return None, f"Not a number: {expr!r}"

    text = expr.strip()
    if not text:
        return None, "Empty expression"

    locals_map: Dict[str, Any] = dict(_ALLOWED_FUNCS)
    for name in params.keys():
        locals_map[name] = sp.Symbol(name)

    try:
        parsed = sp.sympify(text, locals=locals_map)
    except (sp.SympifyError, SyntaxError, TypeError) as ex:
        return None, f"Parse error in {text!r}: {ex}"

    free = {str(s) for s in getattr(parsed, "free_symbols", set())}
    unknown = sorted(s for s in free if s not in params)
    if unknown:
        return None, f"Unknown symbol(s) in {text!r}: {', '.join(unknown)}"

    try:
        subs = {sp.Symbol(k): float(v) for k, v in params.items()}
        val = float(parsed.evalf(subs=subs))
    except (TypeError, ValueError) as ex:
        return None, f"Eval error in {text!r}: {ex}"
    if not math.isfinite(val):
        return None, f"Expression {text!r} is not finite"
    return val, None
