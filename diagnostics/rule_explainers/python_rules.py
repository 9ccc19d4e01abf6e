import re
from diagnostics.rule_explainers.base import make_rule

LANGUAGE = "python"

RULES = [
    # NameError and friends: "name 'x' is not defined"
    make_rule(
        LANGUAGE,
        r"not defined",
        "This Python error means you're using a name (variable or function) that hasn't been defined in this scope.\n"
        "\n"
        "Common fixes:\n"
        "- Check for typos in the name\n"
        "- Make sure you assign to the variable before using it\n"
        "- Ensure you've imported the function/module before calling it",
        flags=re.IGNORECASE,
    ),
    make_rule(
        LANGUAGE,
        r"TypeError: .+",
        "Python TypeError means an operation or function was used with the wrong type.\n"
        "\n"
        "Common causes:\n"
        "- Adding or concatenating incompatible types (e.g. string + int)\n"
        "- Passing the wrong type of argument into a function",
    ),
]
