"""Tests for sangria.serialization: AST JSON round-trip."""

import json

import pytest

from sangria import pretty_print
from sangria.location import SourceSpan
from sangria.nodes import (
    Alt,
    BDecls,
    Case,
    DataDecl,
    DeclHead,
    Deriving,
    FieldDecl,
    FunBind,
    ImportDecl,
    ImportSpecList,
    Lit,
    Match,
    Module,
    PatBind,
    PVar,
    PWildcard,
    RecDecl,
    TyCon,
    TypeSig,
    UnGuardedAlt,
    UnGuardedRhs,
    Var,
)
from sangria.serialization import from_dict, from_json, to_dict, to_json

_LOC = SourceSpan(lineno=1, col_offset=1)


def _module() -> Module:
    record = DataDecl(
        SourceSpan(3, 1, end_lineno=4, end_col_offset=20),
        "data",
        None,
        DeclHead(_LOC, "P"),
        (RecDecl(_LOC, "P", (FieldDecl(_LOC, ("x",), TyCon(_LOC, "Int"), comment="x"),)),),
        Deriving(_LOC, ("Show",)),
    )
    case = Case(
        _LOC,
        Var(_LOC, "n"),
        (Alt(_LOC, PWildcard(_LOC), UnGuardedAlt(_LOC, Lit(_LOC, "0"))),),
    )
    fun = FunBind(
        SourceSpan(7, 1),
        (
            Match(
                _LOC,
                "f",
                (PVar(_LOC, "n"),),
                UnGuardedRhs(_LOC, case),
                BDecls(_LOC, (PatBind(SourceSpan(9, 5), PVar(_LOC, "k"), UnGuardedRhs(_LOC, Lit(_LOC, "1"))),)),
            ),
        ),
    )
    return Module(
        _LOC,
        "Main",
        ("f",),
        (ImportDecl(_LOC, "Data.List", specs=ImportSpecList(_LOC, False, ("sort",))),),
        (record, TypeSig(SourceSpan(6, 1), ("f",), TyCon(_LOC, "Int")), fun),
    )


class TestToDict:
    def test_type_discriminator(self) -> None:
        data = to_dict(Var(_LOC, "x"))
        assert data["_type"] == "Var"
        assert data["name"] == "x"

    def test_span_encoded(self) -> None:
        data = to_dict(Var(SourceSpan(2, 3, end_lineno=2, end_col_offset=4), "x"))
        assert data["span"] == {
            "_type": "SourceSpan",
            "lineno": 2,
            "col_offset": 3,
            "end_lineno": 2,
            "end_col_offset": 4,
        }

    def test_tuples_become_lists(self) -> None:
        data = to_dict(TypeSig(_LOC, ("f", "g"), TyCon(_LOC, "Int")))
        assert data["names"] == ["f", "g"]
        assert data["type"]["_type"] == "TyCon"

    def test_json_compatible(self) -> None:
        json.dumps(to_dict(_module()))


class TestFromDict:
    def test_missing_type(self) -> None:
        with pytest.raises(ValueError, match="Missing '_type'"):
            from_dict({"name": "x"})

    def test_unknown_type(self) -> None:
        with pytest.raises(ValueError, match="Unknown node type"):
            from_dict({"_type": "Spaceship"})

    def test_optional_fields_default(self) -> None:
        data = {"_type": "ImportDecl", "span": to_dict(Var(_LOC, "x"))["span"], "module": "M"}
        node = from_dict(data)
        assert node == ImportDecl(_LOC, "M")


class TestJsonRoundTrip:
    def test_module_round_trip(self) -> None:
        module = _module()
        assert from_json(to_json(module)) == module

    def test_rendering_survives_round_trip(self) -> None:
        module = _module()
        restored = from_json(to_json(module, indent=2))
        assert pretty_print(restored) == pretty_print(module)

    def test_infix_equation_round_trip(self) -> None:
        fun = FunBind(
            _LOC,
            (Match(_LOC, "<+>", (PVar(_LOC, "a"), PVar(_LOC, "b")), UnGuardedRhs(_LOC, Var(_LOC, "a")), infix=True),),
        )
        data = to_dict(fun)
        assert data["matches"][0]["infix"] is True
        restored = from_json(to_json(fun))
        assert restored == fun
        assert pretty_print(restored, "columnar") == "a <+> b = a"

    def test_output_deterministic(self) -> None:
        assert to_json(_module()) == to_json(_module())

    def test_non_object_rejected(self) -> None:
        with pytest.raises(ValueError, match="Expected a serialized node"):
            from_json("[1, 2]")
