"""
Tests for effect expressions
"""

import pytest
from contractpoet.core.expressions import ContractEffectExpression, literal
from contractpoet.poet.functions import FunSpec, ParameterSpec
from contractpoet.poet.types import ANY, STRING


def two_param_function():
    return (FunSpec.builder("check")
            .receiver(STRING.copy(nullable=True))
            .add_parameter(ParameterSpec("first", ANY))
            .add_parameter(ParameterSpec("second", ANY))
            .build())


def test_null_check_operators():
    """Test null check renders == / != depending on negation"""
    function = two_param_function()
    assert ContractEffectExpression.null_check(1).render(function) == "(first == null)"
    assert ContractEffectExpression.null_check(2, True).render(function) == "(second != null)"


def test_receiver_target():
    """Test parameter index 0 addresses the receiver"""
    function = two_param_function()
    expression = ContractEffectExpression.null_check(0, is_negated=True)
    assert expression.render(function) == "(this@check != null)"


def test_instance_check_operators():
    """Test is / !is rendering with a fully-qualified type"""
    function = two_param_function()
    assert ContractEffectExpression.is_instance(STRING, 1).render(function) == "(first is kotlin.String)"
    assert ContractEffectExpression.is_instance(STRING, 2, True).render(function) == "(second !is kotlin.String)"


def test_constant_comparison():
    """Test constant value compared against a parameter"""
    function = two_param_function()
    assert ContractEffectExpression.constant_value(1, 1).render(function) == "(first == 1)"
    assert ContractEffectExpression.constant_value(False, 2, True).render(function) == "(second != false)"


def test_bare_constants():
    """Test literals without a parameter render verbatim"""
    assert ContractEffectExpression.constant_value(True).render() == "(true)"
    assert ContractEffectExpression.constant_value("1").render(suppress_enclosing_parens=True) == "1"


def test_parameter_reference():
    """Test parameter references accept names and ParameterSpecs"""
    by_name = ContractEffectExpression.parameter_reference("body")
    by_spec = ContractEffectExpression.parameter_reference(ParameterSpec("body", STRING))
    assert by_name.render(suppress_enclosing_parens=True) == "body"
    assert by_name == by_spec


def test_literal_tokens():
    """Test Python values map to source literals"""
    assert literal(True) == "true"
    assert literal(False) == "false"
    assert literal(None) == "null"
    assert literal(42) == "42"
    assert literal("x") == "x"


def test_and_appends_without_mutating():
    """Test and_ returns a new expression"""
    first = ContractEffectExpression.null_check(1, True)
    combined = first.and_(ContractEffectExpression.null_check(2, True))
    assert first.and_arguments == ()
    assert len(combined.and_arguments) == 1
    assert combined.render(two_param_function()) == "(first != null && (second != null))"


def test_or_operator():
    """Test | is an alias for or_"""
    first = ContractEffectExpression.null_check(1, True)
    second = ContractEffectExpression.null_check(2, True)
    assert (first | second) == first.or_(second)
    assert (first | second).render(two_param_function()) == "(first != null || (second != null))"


def test_and_renders_before_or():
    """Test combinators flatten onto the root with conjuncts first"""
    expression = (ContractEffectExpression.null_check(1, True)
                  .or_(ContractEffectExpression.null_check(2, True))
                  .and_(ContractEffectExpression.null_check(0, True)))
    assert len(expression.and_arguments) == 1
    assert len(expression.or_arguments) == 1
    assert expression.render(two_param_function()) == \
        "(first != null && (this@check != null) || (second != null))"


def test_nested_combinations():
    """Test combined arguments keep their own sub-expressions"""
    inner = ContractEffectExpression.null_check(2).or_(ContractEffectExpression.null_check(0))
    expression = ContractEffectExpression.null_check(1).and_(inner)
    assert expression.render(two_param_function()) == \
        "(first == null && (second == null || (this@check == null)))"


def test_negative_parameter_index_raises():
    """Test negative targets are rejected by every factory"""
    with pytest.raises(ValueError, match="parameter_index must be >= 0"):
        ContractEffectExpression.null_check(-1)
    with pytest.raises(ValueError, match="parameter_index must be >= 0"):
        ContractEffectExpression.is_instance(STRING, -1)
    with pytest.raises(ValueError, match="parameter_index must be >= 0"):
        ContractEffectExpression.constant_value(1, -2)
    with pytest.raises(ValueError, match="parameter_index must be >= 0"):
        ContractEffectExpression.builder().parameter(-1).null_check_predicate().build()


def test_null_constant_raises():
    """Test null comparisons must use null_check()"""
    with pytest.raises(ValueError, match="null_check"):
        ContractEffectExpression.constant_value("null", 1)
    with pytest.raises(ValueError, match="null_check"):
        ContractEffectExpression.constant_value(" null ", 1)
    with pytest.raises(ValueError, match="null_check"):
        ContractEffectExpression.constant_value(None, 1)


def test_multiple_predicates_raise():
    """Test an expression can only carry one predicate"""
    builder = (ContractEffectExpression.builder()
               .parameter(1)
               .null_check_predicate()
               .instance_type(STRING))
    with pytest.raises(ValueError, match="only have one predicate"):
        builder.build()


def test_missing_constant_raises():
    """Test an expression without a target needs something to render"""
    with pytest.raises(ValueError, match="requires a constant_value"):
        ContractEffectExpression.builder().build()


def test_parameter_without_predicate():
    """Test a bare parameter target renders as a Boolean proposition"""
    expression = ContractEffectExpression.builder().parameter(2).build()
    assert expression.render(two_param_function()) == "(second)"


def test_builder_is_copied_on_build():
    """Test mutating a builder after build() does not affect the built value"""
    builder = ContractEffectExpression.builder().parameter(1).null_check_predicate()
    built = builder.build()
    builder.add_and_argument(ContractEffectExpression.null_check(2))
    builder.negated()
    assert built.and_arguments == ()
    assert built.is_negated is False


def test_to_builder_round_trip():
    """Test to_builder reseeds every field"""
    original = ContractEffectExpression.is_instance(STRING, 1, True).or_(
        ContractEffectExpression.null_check(2))
    copy = original.to_builder().build()
    assert copy == original
    assert copy is not original
    assert copy.is_instance_type == STRING
    assert copy.or_arguments == original.or_arguments


def test_immutable():
    """Test built expressions reject attribute assignment"""
    expression = ContractEffectExpression.null_check(1)
    with pytest.raises(AttributeError):
        expression.is_negated = True


def test_canonical_text():
    """Test str() renders against placeholder parameters"""
    expression = ContractEffectExpression.null_check(1, True).and_(
        ContractEffectExpression.null_check(0, True))
    assert str(expression) == "($1 != null && (this@ != null))"


def test_equality_is_textual():
    """Test differently-built expressions with the same text are equal"""
    via_factory = ContractEffectExpression.null_check(1)
    via_constant = ContractEffectExpression.builder().parameter(1).constant("null").build()
    assert via_factory.is_null_check_predicate != via_constant.is_null_check_predicate
    assert via_factory == via_constant
    assert hash(via_factory) == hash(via_constant)
    assert via_factory != ContractEffectExpression.null_check(1, True)


def test_tags_ignored_by_equality():
    """Test tags are readable but don't affect identity"""
    tagged = ContractEffectExpression.builder().constant("true").tag(str, "note").build()
    assert tagged.tag(str) == "note"
    assert tagged.tag(int) is None
    assert tagged == ContractEffectExpression.constant_value(True)
    assert tagged.to_builder().build().tag(str) == "note"


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
