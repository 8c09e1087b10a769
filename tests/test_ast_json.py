import json

import pytest

from paneer.ast_json import ast_to_obj, ast_from_obj
from paneer.interpreter import Interpreter
from paneer.parser import parse_program
from paneer.types import TypeSpec

SOURCE = """
func grade(score int) string {
    agar score >= 90 { return "A"; } varna agar score >= 75 { return "B"; } varna { return "C"; }
}
ye scores: array<int> = [95, 80, -3];
har s mein scores {
    paneer.bol(grade(s) + " " + !(s < 0));
}
ye half: float = 0.5;
paneer.bol(scores[0] * half);
"""


def test_round_trip_through_json():
    program = parse_program(SOURCE)
    data = json.loads(json.dumps(ast_to_obj(program)))
    assert ast_from_obj(data) == program


def test_round_tripped_program_runs_the_same():
    program = parse_program(SOURCE)
    restored = ast_from_obj(json.loads(json.dumps(ast_to_obj(program))))
    expected, actual = [], []
    Interpreter(output=expected.append).run(program)
    Interpreter(output=actual.append).run(restored)
    assert actual == expected == ['A true', 'B true', 'C false', '47.5']


def test_nested_typespec():
    spec = TypeSpec.array(TypeSpec.array(TypeSpec.float_()))
    assert ast_from_obj(ast_to_obj(spec)) == spec


def test_lines_are_kept():
    program = parse_program('ye a: int = 1;\nye b: int = 2;')
    obj = ast_to_obj(program)
    assert [s["line"] for s in obj["body"]] == [1, 2]


def test_unknown_node_type():
    with pytest.raises(ValueError):
        ast_from_obj({"type": "Nope"})
