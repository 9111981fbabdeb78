from cmdtree.parser import ArgumentContext, SuggestionContext, Suggestions


def test_is_argument():
    suggestion = SuggestionContext(context="a ", prefix="b", index=1)
    assert suggestion.is_argument()
    assert suggestion.is_argument(1)
    assert not suggestion.is_argument(0)
    assert not suggestion.is_flag()
    assert str(suggestion) == "argument 1"


def test_is_flag():
    suggestion = SuggestionContext(context="-w ", prefix="", flag="w")
    assert suggestion.is_flag()
    assert suggestion.is_flag("w")
    assert not suggestion.is_flag("x")
    assert not suggestion.is_argument()
    assert str(suggestion) == "flag -w"


def test_complete_filters_by_prefix_ignoring_case():
    suggestion = SuggestionContext(context="", prefix="Ap", index=0)
    assert suggestion.complete(["banana", "apricot", "Apple"]) == ["Apple", "apricot"]


def test_empty_prefix_completes_everything():
    suggestion = SuggestionContext(context="", prefix="", index=0)
    assert suggestion.complete(["b", "a"]) == ["a", "b"]


def test_suggest_argument():
    context = ArgumentContext.parse(["give", "ap"], completing=True)
    suggestion = context.suggestion_context
    result = suggestion.suggest_argument(0, ["apple", "apricot", "banana"])
    assert result == Suggestions(("apple", "apricot"))
    assert suggestion.suggest_argument(1, ["apple"]) is None
    assert suggestion.suggest_flag("w", ["world"]) is None


def test_suggest_flag():
    context = ArgumentContext.parse(["tp", "-w", "ne"], {"w"}, completing=True)
    result = context.suggestion_context.suggest_flag("w", ["world", "nether"])
    assert result.to_list() == ["nether"]


def test_suggestions_are_tuples():
    suggestions = Suggestions(["a", "b"])
    assert suggestions.completions == ("a", "b")
    assert suggestions.to_list() == ["a", "b"]
    assert Suggestions().to_list() == []
