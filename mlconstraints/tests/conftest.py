from mlconstraints.semantics.constraint import Constraint


def is_constraint_list(value):
    return isinstance(value, list) and all(isinstance(c, Constraint) for c in value)


def pytest_assertrepr_compare(op, left, right):
    if op == "==" and is_constraint_list(left) and is_constraint_list(right):
        lines = ["Comparing constraint lists:"]
        for i in range(max(len(left), len(right))):
            lhs = str(left[i]) if i < len(left) else "<missing>"
            rhs = str(right[i]) if i < len(right) else "<missing>"
            marker = "  " if lhs == rhs else "!="
            lines.append(f"  {marker} [{i}] {lhs:<24} {rhs}")
        return lines
