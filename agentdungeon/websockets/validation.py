"""Lightweight websocket payload validation utilities.

Minimal schema-like checking with consistent error responses; not a general
JSON Schema implementation. Returns ``(ok, value_or_error)`` tuples so the
caller decides whether to emit an ``error`` event.

Schema mini-language (Python dict):
{
  'field_name': ('type', required: bool, extras: dict)
}
Supported types: 'str', 'int', 'bool', 'scalar' (int or str)
Extras:
  str:    max_len, min_len, choices
  int:    min, max
  scalar: max_len (applied to the str form)

If invalid: (False, {'field': 'size', 'error': 'too small', 'code': 'min'})
If valid:   (True, normalized_data)
"""
from __future__ import annotations

from typing import Any, Dict, Tuple

from agentdungeon.dungeon import STRATEGIES
from agentdungeon.dungeon.api_helpers.params import MAX_SIZE

PRIMITIVES = {
    'str': (str,),
    'int': (int,),
    'bool': (bool,),
    'scalar': (int, str),
}


def _fail(field: str, message: str, code: str) -> Tuple[bool, Dict[str, Any]]:
    return False, {'field': field, 'error': message, 'code': code}


def validate(payload: Any, schema: Dict[str, tuple]) -> Tuple[bool, Dict[str, Any]]:
    if not isinstance(payload, dict):
        return _fail('__root__', 'payload must be an object', 'type')
    out = {}
    for name, spec in schema.items():
        type_name, required = spec[0], spec[1]
        extras = spec[2] if len(spec) > 2 else {}
        if type_name not in PRIMITIVES:
            return _fail('__schema__', f'unsupported type {type_name}', 'schema')
        if name not in payload or payload[name] is None:
            if required:
                return _fail(name, 'missing required field', 'required')
            continue
        value = payload[name]
        # bool is an int subclass; only accept it where asked for
        if isinstance(value, bool) and type_name != 'bool':
            return _fail(name, f'expected {type_name}', 'type')
        if not isinstance(value, PRIMITIVES[type_name]):
            return _fail(name, f'expected {type_name}', 'type')
        if type_name == 'str':
            s = value.strip()
            if not s:
                return _fail(name, 'must not be empty', 'empty')
            if 'max_len' in extras and len(s) > extras['max_len']:
                return _fail(name, 'too long', 'max_len')
            if 'min_len' in extras and len(s) < extras['min_len']:
                return _fail(name, 'too short', 'min_len')
            if 'choices' in extras and s.lower() not in extras['choices']:
                return _fail(name, f"must be one of {', '.join(extras['choices'])}", 'choices')
            out[name] = s
        elif type_name == 'int':
            if 'min' in extras and value < extras['min']:
                return _fail(name, 'too small', 'min')
            if 'max' in extras and value > extras['max']:
                return _fail(name, 'too large', 'max')
            out[name] = value
        elif type_name == 'scalar':
            if isinstance(value, str) and 'max_len' in extras and len(value) > extras['max_len']:
                return _fail(name, 'too long', 'max_len')
            out[name] = value
        else:
            out[name] = value
    return True, out


GENERATE = {
    'strategy': ('str', False, {'choices': STRATEGIES}),
    'seed': ('scalar', False, {'max_len': 64}),
    'size': ('int', False, {'min': 1, 'max': MAX_SIZE}),
    'debug': ('bool', False),
}
