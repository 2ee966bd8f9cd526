"""Tests for app.services.prompt_composer: instruction text assembly.

Tests cover:
- Determinism.
- Single vs. multiple image identity clauses.
- Conditional background, character and scene clauses.
- Aspect ratio and quality tier clauses.
- Clause ordering.
"""

import pytest

from app.models.generation import AspectRatio, FormParameters, Quality, UploadedImage
from app.services.prompt_composer import (
    MULTI_IDENTITY_CLAUSE,
    PROMPT_RULES,
    QUALITY_CLAUSES,
    REMOVE_BACKGROUND_CLAUSE,
    SINGLE_IDENTITY_CLAUSE,
    PromptContext,
    compose_instruction,
    compose_prompt,
)


class TestDeterminism:

    def test_same_inputs_same_prompt(self, make_form):
        params = make_form(scene="a castle", quality="4K")
        assert compose_prompt(params) == compose_prompt(params)

    def test_equal_forms_same_prompt(self, make_form):
        assert compose_prompt(make_form()) == compose_prompt(make_form())

    def test_no_surrounding_whitespace(self, make_form):
        prompt = compose_prompt(make_form(quality="8K"))
        assert prompt == prompt.strip()
        assert "  " not in prompt


class TestIdentityClause:

    def test_single_image_uses_singular_clause(self, make_form, png_image):
        prompt = compose_prompt(make_form(images=[png_image]))
        assert prompt.startswith(SINGLE_IDENTITY_CLAUSE)
        assert MULTI_IDENTITY_CLAUSE not in prompt

    def test_multiple_images_use_multi_clause(self, make_form, png_image):
        prompt = compose_prompt(make_form(images=[png_image, png_image]))
        assert prompt.startswith(MULTI_IDENTITY_CLAUSE)
        assert "Do not merge their features." in prompt

    def test_clauses_differ(self):
        assert SINGLE_IDENTITY_CLAUSE != MULTI_IDENTITY_CLAUSE

    def test_identity_clause_present_without_description(self):
        prompt = compose_instruction(PromptContext(image_count=1))
        assert prompt.startswith(SINGLE_IDENTITY_CLAUSE)

    def test_context_defaults_match_form(self):
        prompt = compose_instruction(PromptContext(image_count=1))
        assert REMOVE_BACKGROUND_CLAUSE in prompt
        assert prompt == compose_prompt(FormParameters(images=[UploadedImage(b"x", "image/png")]))


class TestConditionalClauses:

    def test_background_clause_when_requested(self, make_form):
        assert REMOVE_BACKGROUND_CLAUSE in compose_prompt(make_form(remove_background=True))

    def test_no_background_clause_when_not_requested(self, make_form):
        assert REMOVE_BACKGROUND_CLAUSE not in compose_prompt(make_form(remove_background=False))

    def test_character_clause(self, make_form):
        assert "Character description: a knight." in compose_prompt(make_form())

    def test_empty_character_omitted(self, make_form):
        prompt = compose_prompt(make_form(character="", scene="a forest"))
        assert "Character description" not in prompt

    def test_character_passed_through_verbatim(self, make_form):
        prompt = compose_prompt(make_form(character="  a knight ", scene="a forest"))
        assert "Character description:   a knight ." in prompt
        assert "Scene, environment: a forest." in prompt

    def test_scene_clause(self, make_form):
        assert "Scene, environment: a foggy harbour." in compose_prompt(make_form(scene="a foggy harbour"))

    def test_empty_scene_omitted(self, make_form):
        assert "Scene, environment" not in compose_prompt(make_form(scene=""))


class TestAspectRatio:

    @pytest.mark.parametrize("ratio", [r.value for r in AspectRatio])
    def test_literal_ratio_named(self, make_form, ratio):
        prompt = compose_prompt(make_form(aspect_ratio=ratio))
        assert f"aspect ratio of {ratio}." in prompt


class TestQualityClause:

    def test_standard_adds_nothing(self, make_form):
        prompt = compose_prompt(make_form(quality="Standard"))
        assert prompt.endswith("aspect ratio of 1:1.")
        assert "resolution" not in prompt

    @pytest.mark.parametrize("tier", ["2K", "4K", "8K"])
    def test_tier_clause_names_tier(self, make_form, tier):
        prompt = compose_prompt(make_form(quality=tier))
        assert prompt.endswith(f"suitable for {tier} resolution.")

    def test_tier_clauses_distinct(self):
        clauses = [QUALITY_CLAUSES[q] for q in (Quality.TWO_K, Quality.FOUR_K, Quality.EIGHT_K)]
        assert all(clauses)
        assert len(set(clauses)) == 3

    def test_every_tier_mapped(self):
        assert set(QUALITY_CLAUSES) == set(Quality)


class TestOrdering:

    def test_rule_order(self, make_form):
        prompt = compose_prompt(make_form(scene="a castle", quality="2K"))
        positions = [
            prompt.index(SINGLE_IDENTITY_CLAUSE),
            prompt.index(REMOVE_BACKGROUND_CLAUSE),
            prompt.index("Character description:"),
            prompt.index("Scene, environment:"),
            prompt.index("aspect ratio of"),
            prompt.index("2K resolution"),
        ]
        assert positions == sorted(positions)

    def test_rule_count(self):
        assert len(PROMPT_RULES) == 6

    def test_knight_scenario(self, make_form):
        prompt = compose_prompt(make_form())
        assert prompt == " ".join([
            SINGLE_IDENTITY_CLAUSE,
            "Remove the background.",
            "Character description: a knight.",
            "The final image should have an aspect ratio of 1:1.",
        ])
