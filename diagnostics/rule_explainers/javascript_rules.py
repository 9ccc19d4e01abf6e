from diagnostics.rule_explainers.base import make_rule

LANGUAGE = "javascript"

RULES = [
    make_rule(
        LANGUAGE,
        r"ReferenceError: (.+) is not defined",
        "JavaScript ReferenceError means you're using a variable that hasn't been declared in this scope.\n"
        "\n"
        "Declare the variable first, or make sure the script that defines it runs before this code.",
    ),
]
