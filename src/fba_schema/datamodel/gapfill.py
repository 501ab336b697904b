"""Gap-filling and gap-generation formulations and their solutions."""

from __future__ import annotations

from pydantic import Field

from fba_schema.datamodel.base import ConfiguredBaseModel


class GapfillingReaction(ConfiguredBaseModel):
    """Reaction proposed for addition by a gap-filling solution."""

    reaction_ref: str | None = None
    compartment_ref: str | None = None
    direction: str | None = None
    candidate_feature_refs: list[str] = Field(default_factory=list, alias="candidateFeature_refs")


class GapfillingSolution(ConfiguredBaseModel):
    id: str
    solution_cost: float | None = Field(default=None, alias="solutionCost")
    biomass_removal_refs: list[str] = Field(default_factory=list, alias="biomassRemoval_refs")
    media_supplement_refs: list[str] = Field(default_factory=list, alias="mediaSupplement_refs")
    ko_restore_refs: list[str] = Field(default_factory=list, alias="koRestore_refs")
    integrated: bool = False
    suboptimal: bool = False
    reactions: list[GapfillingReaction] = Field(default_factory=list, alias="gapfillingSolutionReactions")


class Gapfilling(ConfiguredBaseModel):
    """Formulation and solutions of a gap-filling analysis."""

    id: str
    fba_ref: str | None = None
    media_ref: str | None = None
    fbamodel_ref: str | None = None
    probanno_ref: str | None = None

    media_hypothesis: bool = Field(default=False, alias="mediaHypothesis")
    biomass_hypothesis: bool = Field(default=False, alias="biomassHypothesis")
    gpr_hypothesis: bool = Field(default=False, alias="gprHypothesis")
    reaction_addition_hypothesis: bool = Field(default=False, alias="reactionAdditionHypothesis")
    balanced_reactions_only: bool = Field(default=False, alias="balancedReactionsOnly")
    complete_gapfill: bool = Field(default=False, alias="completeGapfill")

    guaranteed_reaction_refs: list[str] = Field(default_factory=list, alias="guaranteedReaction_refs")
    targeted_reaction_refs: list[str] = Field(default_factory=list, alias="targetedreaction_refs")
    blacklisted_reaction_refs: list[str] = Field(default_factory=list, alias="blacklistedReaction_refs")
    allowable_compartment_refs: list[str] = Field(default_factory=list, alias="allowableCompartment_refs")

    reaction_activation_bonus: float | None = Field(default=None, alias="reactionActivationBonus")
    drain_flux_multiplier: float | None = Field(default=None, alias="drainFluxMultiplier")
    directionality_multiplier: float | None = Field(default=None, alias="directionalityMultiplier")
    delta_g_multiplier: float | None = Field(default=None, alias="deltaGMultiplier")
    no_structure_multiplier: float | None = Field(default=None, alias="noStructureMultiplier")
    no_delta_g_multiplier: float | None = Field(default=None, alias="noDeltaGMultiplier")
    biomass_transporter_multiplier: float | None = Field(default=None, alias="biomassTransporterMultiplier")
    single_transporter_multiplier: float | None = Field(default=None, alias="singleTransporterMultiplier")
    transporter_multiplier: float | None = Field(default=None, alias="transporterMultiplier")

    time_per_solution: int | None = Field(default=None, alias="timePerSolution")
    total_time_limit: int | None = Field(default=None, alias="totalTimeLimit")

    reaction_multipliers: dict[str, float] = Field(default_factory=dict, alias="reactionMultipliers")
    solutions: list[GapfillingSolution] = Field(default_factory=list, alias="gapfillingSolutions")


class GapgenerationSolutionReaction(ConfiguredBaseModel):
    """Model reaction proposed for removal by a gap-generation solution."""

    modelreaction_ref: str | None = None
    direction: str | None = None


class GapgenerationSolution(ConfiguredBaseModel):
    id: str
    solution_cost: float | None = Field(default=None, alias="solutionCost")
    # wire name keeps the historical triple "p"
    biomass_supplement_refs: list[str] = Field(default_factory=list, alias="biomassSuppplement_refs")
    media_removal_refs: list[str] = Field(default_factory=list, alias="mediaRemoval_refs")
    additional_ko_refs: list[str] = Field(default_factory=list, alias="additionalKO_refs")
    integrated: bool = False
    suboptimal: bool = False
    reactions: list[GapgenerationSolutionReaction] = Field(default_factory=list, alias="gapgenSolutionReactions")


class Gapgeneration(ConfiguredBaseModel):
    """Formulation and solutions of a gap-generation analysis."""

    id: str
    fba_ref: str | None = None
    fbamodel_ref: str | None = None

    media_hypothesis: bool = Field(default=False, alias="mediaHypothesis")
    biomass_hypothesis: bool = Field(default=False, alias="biomassHypothesis")
    gpr_hypothesis: bool = Field(default=False, alias="gprHypothesis")
    reaction_removal_hypothesis: bool = Field(default=False, alias="reactionRemovalHypothesis")

    media_ref: str | None = None
    reference_media_ref: str | None = Field(default=None, alias="referenceMedia_ref")

    time_per_solution: int | None = Field(default=None, alias="timePerSolution")
    total_time_limit: int | None = Field(default=None, alias="totalTimeLimit")

    solutions: list[GapgenerationSolution] = Field(default_factory=list, alias="gapgenSolutions")
