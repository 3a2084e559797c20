"""
Tests for the generation driver.
"""

from __future__ import annotations

import pytest

from reactive_property_gen.pipeline import (
    CancellationToken,
    CSharpSourceReader,
    CSharpSymbolResolver,
    DuplicateArtifactError,
    GenerationCancelledError,
    GeneratorConfig,
    ReactivePropertyGenerator,
    generate,
)

MARKER = "ReactiveObject.Generators.ReactivePropertyAttribute"

SOURCE = """
using System;
using ReactiveObject.Generators;

namespace MyTestNamespace
{
    public class MyTestClass
    {
        [ReactiveProperty]
        private DateTime _dateTime;
    }

    public class Plain
    {
        private int _notMarked;
    }

    public class Many
    {
        [ReactiveProperty] private int _third;
        [ReactiveProperty] private string _first;
        private bool _skipped;
        [ReactiveProperty] private double _second;
    }
}

namespace Other
{
    public class MyTestClass
    {
        [ReactiveProperty] private int _value;
    }
}
"""


@pytest.fixture(scope="module")
def reader():
    return CSharpSourceReader()


def _generator(reader, code=SOURCE, config=None, with_marker=True):
    resolver = CSharpSymbolResolver(reader.declared_type_names(code))
    if with_marker:
        resolver.add_type(MARKER)
    return ReactivePropertyGenerator(resolver, config), reader.read_source(code)


def test_marker_artifact_comes_first(reader):
    generator, types = _generator(reader)
    artifacts = generator.generate(types)
    assert artifacts[0].name == "ReactivePropertyAttribute.g.cs"
    assert "public sealed class ReactivePropertyAttribute : System.Attribute" in artifacts[0].text
    assert [a.name for a in artifacts[1:]] == [
        "MyTestNamespace.MyTestClassReactiveProperty.g.cs",
        "MyTestNamespace.ManyReactiveProperty.g.cs",
        "Other.MyTestClassReactiveProperty.g.cs",
    ]


def test_end_to_end_scenario(reader):
    generator, types = _generator(reader)
    text = {a.name: a.text for a in generator.generate(types)}["MyTestNamespace.MyTestClassReactiveProperty.g.cs"]
    assert "namespace MyTestNamespace\n{" in text
    assert "    public partial class MyTestClass\n    {" in text
    assert "        public DateTime DateTime\n" in text
    assert "get => _dateTime;" in text
    assert "set => this.RaiseAndSetIfChanged(ref _dateTime, value);" in text


def test_property_blocks_follow_declaration_order(reader):
    generator, types = _generator(reader)
    text = {a.name: a.text for a in generator.generate(types)}["MyTestNamespace.ManyReactiveProperty.g.cs"]
    assert text.count("RaiseAndSetIfChanged") == 3
    assert text.index("int Third") < text.index("string First") < text.index("double Second")
    assert "Skipped" not in text


def test_generation_is_deterministic(reader):
    generator, types = _generator(reader)
    first = generator.generate(types)
    second = generator.generate(types)
    again, types_again = _generator(reader)
    assert first == second == again.generate(types_again)


def test_no_marked_fields_yields_only_marker_artifact(reader):
    code = "namespace N { public class Plain { private int _x; } }"
    generator, types = _generator(reader, code)
    artifacts = generator.generate(types)
    assert [a.name for a in artifacts] == ["ReactivePropertyAttribute.g.cs"]


def test_marker_missing_from_compilation_yields_only_marker_artifact(reader):
    generator, types = _generator(reader, with_marker=False)
    assert [a.name for a in generator.generate(types)] == ["ReactivePropertyAttribute.g.cs"]


def test_marker_class_is_declared_once_per_batch(reader):
    code = """
using ReactiveObject.Generators;
namespace N
{
    public partial class A { [ReactiveProperty] private int _a; }
    public partial class B { [ReactiveProperty] private int _b; }
}
"""
    generator, types = _generator(reader, code)
    artifacts = generator.generate(types)
    assert [a.name for a in artifacts] == ["ReactivePropertyAttribute.g.cs", "N.AReactiveProperty.g.cs", "N.BReactiveProperty.g.cs"]
    assert sum(a.text.count("class ReactivePropertyAttribute") for a in artifacts) == 1
    assert all("using ReactiveObject.Generators;" in a.text for a in artifacts[1:])

def test_unrelated_same_named_attribute_is_ignored(reader):
    code = """
namespace Lookalike
{
    public sealed class ReactivePropertyAttribute : System.Attribute { }

    public class Target
    {
        [ReactiveProperty] private int _value;
    }
}
"""
    generator, types = _generator(reader, code)
    assert [a.name for a in generator.generate(types)] == ["ReactivePropertyAttribute.g.cs"]


def test_simple_names_collide(reader):
    config = GeneratorConfig(qualify_artifact_names=False)
    generator, types = _generator(reader, config=config)
    with pytest.raises(DuplicateArtifactError):
        generator.generate(types)


def test_simple_names_without_collision(reader):
    code = """
using ReactiveObject.Generators;
namespace N { public class Solo { [ReactiveProperty] private int _x; } }
"""
    generator, types = _generator(reader, code, config=GeneratorConfig(qualify_artifact_names=False))
    assert [a.name for a in generator.generate(types)][1:] == ["SoloReactiveProperty.g.cs"]


def test_generic_artifact_name(reader):
    code = """
using ReactiveObject.Generators;
namespace N { public partial class Map<TKey, TValue> { [ReactiveProperty] private TKey _key; } }
"""
    generator, types = _generator(reader, code)
    assert generator.generate(types)[-1].name == "N.Map_TKey_TValueReactiveProperty.g.cs"


def test_cancelled_before_start(reader):
    generator, types = _generator(reader)
    token = CancellationToken()
    token.cancel()
    with pytest.raises(GenerationCancelledError):
        generator.generate(types, token)


def test_cancelled_mid_batch_returns_nothing(reader):
    generator, types = _generator(reader)
    token = CancellationToken()
    rendered = []
    original_render = generator.renderer.render

    def render_then_cancel(descriptor):
        rendered.append(descriptor.name)
        token.cancel()
        return original_render(descriptor)

    generator.renderer.render = render_then_cancel
    with pytest.raises(GenerationCancelledError):
        generator.generate(types, token)
    assert rendered == ["MyTestClass"]


def test_cancelled_during_scan(reader):
    """Cancellation while scanning one type stops before the next type"""
    token = CancellationToken()
    resolver = CSharpSymbolResolver(reader.declared_type_names(SOURCE) | {MARKER})
    seen = []
    original = resolver.resolve_attribute

    def resolve_then_cancel(declared_type, attribute):
        seen.append(declared_type.name)
        token.cancel()
        return original(declared_type, attribute)

    resolver.resolve_attribute = resolve_then_cancel
    with pytest.raises(GenerationCancelledError):
        generate(reader.read_source(SOURCE), resolver, cancellation=token)
    assert set(seen) == {"MyTestClass"}


def test_module_level_generate(reader):
    resolver = CSharpSymbolResolver(reader.declared_type_names(SOURCE) | {MARKER})
    artifacts = generate(reader.read_source(SOURCE), resolver)
    assert len(artifacts) == 4
    assert all(a.encode() == a.text.encode("utf-8") for a in artifacts)
