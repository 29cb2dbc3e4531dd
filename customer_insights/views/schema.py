import streamlit as st

# (entity, [(column, type, key)])
ENTITIES = (
    (
        "CUSTOMER",
        [
            ("id", "string", "PK"),
            ("name", "string", ""),
            ("gender", "string", ""),
            ("age", "int", ""),
            ("income", "decimal", ""),
            ("division_id", "string", "FK"),
            ("marital_status_id", "string", "FK"),
        ],
    ),
    ("DIVISION", [("id", "string", "PK"), ("name", "string", ""), ("region", "string", "")]),
    (
        "MARITAL_STATUS",
        [("id", "string", "PK"), ("status", "string", ""), ("description", "string", "")],
    ),
    (
        "INCOME_CATEGORY",
        [
            ("id", "string", "PK"),
            ("range", "string", ""),
            ("min_value", "decimal", ""),
            ("max_value", "decimal", ""),
        ],
    ),
    (
        "AGE_GROUP",
        [("id", "string", "PK"), ("range", "string", ""), ("min_age", "int", ""), ("max_age", "int", "")],
    ),
)

RELATIONSHIPS = (
    ("CUSTOMER", "DIVISION", "lives in"),
    ("CUSTOMER", "MARITAL_STATUS", "has"),
    ("CUSTOMER", "INCOME_CATEGORY", "falls under"),
    ("CUSTOMER", "AGE_GROUP", "belongs to"),
)


def erd_dot() -> str:
    """Graphviz source for the conceptual customer schema."""
    lines = [
        "digraph erd {",
        "  rankdir=LR;",
        '  node [shape=plaintext, fontname="Helvetica"];',
        '  edge [fontname="Helvetica", fontsize=10, arrowhead=crow, arrowtail=tee, dir=both];',
    ]
    for entity, columns in ENTITIES:
        rows = "".join(
            f'<tr><td align="left">{name}</td><td align="left">{kind}</td><td>{key}</td></tr>'
            for name, kind, key in columns
        )
        lines.append(
            f"  {entity} [label=<<table border=\"0\" cellborder=\"1\" cellspacing=\"0\">"
            f"<tr><td colspan=\"3\" bgcolor=\"#e2e8f0\"><b>{entity}</b></td></tr>{rows}</table>>];"
        )
    for source, target, label in RELATIONSHIPS:
        lines.append(f'  {source} -> {target} [label="{label}"];')
    lines.append("}")
    return "\n".join(lines)


def render():
    st.subheader("Database Schema")
    st.caption("Conceptual model behind the customer dataset.")
    st.graphviz_chart(erd_dot(), use_container_width=True)

    for entity, columns in ENTITIES:
        with st.expander(entity):
            st.table([{"Column": name, "Type": kind, "Key": key} for name, kind, key in columns])
