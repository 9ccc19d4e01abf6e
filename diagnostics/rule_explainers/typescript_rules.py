from diagnostics.rule_explainers.base import make_rule

LANGUAGE = "typescript"

RULES = [
    make_rule(
        LANGUAGE,
        r"Cannot find name '(.+)'",
        "TypeScript \"Cannot find name\" means the identifier is not in scope.\n"
        "\n"
        "Common fixes:\n"
        "- Import it from the correct module\n"
        "- Declare the variable before using it\n"
        "- Check for typos in the name",
    ),
    make_rule(
        LANGUAGE,
        r"Property '(.+)' does not exist on type",
        "This error means you're trying to use a property that TypeScript doesn't think exists on that type.\n"
        "\n"
        "Check:\n"
        "- The type/interface definition\n"
        "- Spelling of the property\n"
        "- Whether you need to extend the type or add a type annotation",
    ),
]
