"""Declaration-order check: deterministic structural validation of a field list.

Returns a list of issues. If empty, every field only depends on fields
declared before it, so resolving the list top to bottom never reads an
answer that could not exist yet.
"""


def check_field_order(fields) -> list[str]:
    """Check that the field list forms a valid resolution order.

    Flags duplicate names, dependencies on unknown fields, and dependencies
    on the field itself or on fields declared later.

    Returns a list of issue strings. Empty list = valid order.
    """
    issues = []
    declared = set()
    all_names = {f.name for f in fields}

    for field in fields:
        if not field.name:
            issues.append("Field with an empty name.")
            continue
        if field.name in declared:
            issues.append(f"Duplicate field name '{field.name}'.")
            continue

        for dep in field.depends_on:
            if dep == field.name:
                issues.append(f"Field '{field.name}' depends on itself.")
            elif dep not in all_names:
                issues.append(
                    f"Field '{field.name}' depends on '{dep}' which is not defined."
                )
            elif dep not in declared:
                issues.append(
                    f"Field '{field.name}' depends on '{dep}' which is declared after it."
                )

        declared.add(field.name)

    return issues
