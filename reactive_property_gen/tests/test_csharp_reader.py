"""
Tests for reading class declarations out of C# source.
"""

from __future__ import annotations

import logging
from pathlib import Path

import pytest

from reactive_property_gen.pipeline import Accessibility, AttributeUsage, CSharpSourceReader, SourceReadError


@pytest.fixture(scope="module")
def reader():
    return CSharpSourceReader()


def test_block_namespace_and_fields(reader):
    code = """
using System;
using ReactiveObject.Generators;

namespace MyTestNamespace
{
    public class MyTestClass
    {
        [ReactiveProperty]
        private DateTime _dateTime;

        private int _counter;
    }
}
"""
    types = reader.read_source(code)
    assert len(types) == 1
    declared = types[0]
    assert declared.name == "MyTestClass"
    assert declared.namespace == "MyTestNamespace"
    assert declared.fully_qualified_name == "MyTestNamespace.MyTestClass"
    assert declared.accessibility == Accessibility.PUBLIC
    assert declared.usings == ("System", "ReactiveObject.Generators")
    assert [f.name for f in declared.fields] == ["_dateTime", "_counter"]
    assert declared.fields[0].type_name == "DateTime"
    assert declared.fields[0].attributes == (AttributeUsage("ReactiveProperty"),)
    assert declared.fields[1].attributes == ()


def test_file_scoped_namespace(reader):
    code = """
namespace Company.Product.Models;

internal partial class Person
{
    [ReactiveProperty] private string _name;
}
"""
    types = reader.read_source(code)
    assert [t.fully_qualified_name for t in types] == ["Company.Product.Models.Person"]
    assert types[0].accessibility == Accessibility.INTERNAL


def test_nested_namespaces_are_joined(reader):
    code = """
namespace Outer
{
    namespace Inner
    {
        class Thing { }
    }
}
"""
    types = reader.read_source(code)
    assert types[0].namespace == "Outer.Inner"
    assert types[0].accessibility is None


def test_global_namespace(reader):
    types = reader.read_source("public class Loose { private int _x; }")
    assert types[0].namespace == ""
    assert types[0].fully_qualified_name == "Loose"


def test_multi_variable_field_yields_one_member_per_variable(reader):
    code = """
class Pair
{
    [ReactiveProperty]
    private int _left, _right;
}
"""
    fields = reader.read_source(code)[0].fields
    assert [f.name for f in fields] == ["_left", "_right"]
    assert all(f.type_name == "int" for f in fields)
    assert all(f.attributes == (AttributeUsage("ReactiveProperty"),) for f in fields)


def test_attribute_lists_and_qualified_attributes(reader):
    code = """
class Tagged
{
    [Obsolete, ReactiveObject.Generators.ReactiveProperty]
    [field: NonSerialized]
    private System.Collections.Generic.List<string> _items;
}
"""
    field = reader.read_source(code)[0].fields[0]
    assert [a.name for a in field.attributes] == ["Obsolete", "ReactiveObject.Generators.ReactiveProperty", "NonSerialized"]
    assert field.type_name == "System.Collections.Generic.List<string>"


def test_generic_class_and_nested_class(reader):
    code = """
namespace Shapes
{
    public partial class Box<T>
    {
        [ReactiveProperty] private T _content;

        protected internal partial class Lid
        {
            [ReactiveProperty] private bool _open;
        }
    }
}
"""
    types = reader.read_source(code)
    assert [t.name for t in types] == ["Box", "Lid"]
    box, lid = types
    assert box.type_parameters == "<T>"
    assert box.fully_qualified_name == "Shapes.Box<T>"
    assert lid.containing_types == ("Box",)
    assert lid.is_nested
    assert lid.accessibility == Accessibility.PROTECTED_INTERNAL
    assert lid.fully_qualified_name == "Shapes.Box.Lid"


def test_using_aliases_and_static_usings(reader):
    code = """
using static System.Math;
using RP = ReactiveObject.Generators.ReactivePropertyAttribute;
using System.Linq;

class Aliased { }
"""
    declared = reader.read_source(code)[0]
    assert declared.usings == ("System.Linq",)
    assert declared.using_aliases == {"RP": "ReactiveObject.Generators.ReactivePropertyAttribute"}


def test_declared_type_names_cover_all_kinds(reader):
    code = """
namespace Kinds
{
    public class C { public struct S { } }
    public interface I { }
    public enum E { A }
}
"""
    names = reader.declared_type_names(code)
    assert {"Kinds.C", "Kinds.C.S", "Kinds.I", "Kinds.E"} <= names


def test_syntax_errors_are_logged_not_raised(reader, caplog):
    code = """
public class Fine
{
    [ReactiveProperty] private int _value;
}

public class Broken
{
    private int = ;
}
"""
    with caplog.at_level(logging.WARNING):
        types = reader.read_source(code, "Broken.cs")
    assert "Broken.cs has syntax errors" in caplog.text
    assert any(t.name == "Fine" for t in types)


def test_first_error_line(reader):
    assert reader.first_error_line("class Ok { }") is None
    assert reader.first_error_line("class Ok { }\nclass {") is not None


def test_read_paths_sorts_and_skips_generated_files(reader, tmp_path: Path):
    (tmp_path / "sub").mkdir()
    (tmp_path / "b.cs").write_text("class B { }", encoding="utf-8")
    (tmp_path / "sub" / "a.cs").write_text("class A { }", encoding="utf-8")
    (tmp_path / "BReactiveProperty.g.cs").write_text("partial class B { }", encoding="utf-8")
    (tmp_path / "notes.txt").write_text("class Nope { }", encoding="utf-8")

    sources = reader.read_paths([tmp_path])
    assert [p.name for p in sources.paths] == ["b.cs", "a.cs"]
    assert [t.name for t in sources.types] == ["B", "A"]
    assert sources.type_names == {"A", "B"}

    with_generated = reader.read_paths([tmp_path], exclude_generated=False)
    assert len(with_generated.paths) == 3


def test_read_paths_rejects_undecodable_file(reader, tmp_path: Path):
    bad = tmp_path / "bad.cs"
    bad.write_bytes(b"class \xff\xfe { }")
    with pytest.raises(SourceReadError):
        reader.read_paths([bad])
