"""Streamlit page for trying refinement chips against the local section store."""
from __future__ import annotations

import streamlit as st

from application.refinement.aggregation import similarity_from_distance
from application.use_cases.search_sections import search_sections
from domain.entities import RefinementChip
from infrastructure.config import build_default_container, load_config_from_env
from ui.logging_utils import setup_logging

_TYPE_LABELS = {"sectionName": "Section Name", "sectionKey": "Section Key"}


@st.cache_resource
def _container():
    setup_logging()
    return build_default_container(load_config_from_env())


container = _container()
st.set_page_config(page_title="Content Refinement")
st.title("Content Refinement")

query = st.text_input("Query", value="homepage-section headline")
limit = st.slider("Chip limit", min_value=1, max_value=container.settings.max_limit, value=container.settings.default_limit)

if query.strip():
    chips = container.refinement_engine.get_refinement_chips(query, limit)
    if not chips:
        st.info("No matching sections yet. Import sections through the API first.")
    selected: list[RefinementChip] = []
    for idx, chip in enumerate(chips):
        label = f"{_TYPE_LABELS.get(chip.type, chip.type)}: {chip.value} ({chip.count})"
        if st.checkbox(label, key=f"chip-{idx}-{chip.type}-{chip.value}"):
            selected.append(chip)

    if selected:
        st.header("Results")
        for match in search_sections(query, search_client=container.search_client, chips=selected):
            section = match.section
            st.write(
                {
                    "section_id": section.id if section else match.chunk_id,
                    "similarity": round(similarity_from_distance(match.distance), 3),
                    "field": section.original_field_name if section else None,
                    "text": section.text if section else match.text,
                }
            )
