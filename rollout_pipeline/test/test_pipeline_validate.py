import pytest

from rollout_pipeline.exceptions import (
    DanglingDependencyError,
    DuplicateStepError,
    InvalidFieldError,
    MissingFieldError,
)
from rollout_pipeline.models.pipeline import Pipeline, ResourceGroup, Step


def _rg(name, *steps, subscription="sub1"):
    return ResourceGroup(name=name, subscription=subscription, steps=list(steps))


@pytest.mark.parametrize(
    "rg, message",
    [
        pytest.param(ResourceGroup(), "resource group name is required", id="missing name"),
        pytest.param(
            ResourceGroup(subscription="sub", steps=[Step(name="s")]),
            "resource group name is required",
            id="missing name with other fields",
        ),
        pytest.param(ResourceGroup(name="test"), "subscription is required", id="missing subscription"),
    ],
)
def test_resource_group_validate(rg, message):
    with pytest.raises(MissingFieldError) as exc_info:
        rg.validate()
    assert str(exc_info.value) == message


def test_resource_group_without_steps_is_valid():
    ResourceGroup(name="rg", subscription="sub").validate()


@pytest.mark.parametrize(
    "pipeline, error_type, message",
    [
        pytest.param(
            Pipeline(resource_groups=[ResourceGroup()]),
            MissingFieldError,
            "resource group name is required",
            id="missing name",
        ),
        pytest.param(
            Pipeline(resource_groups=[ResourceGroup(name="rg")]),
            MissingFieldError,
            "subscription is required",
            id="missing subscription",
        ),
        pytest.param(
            Pipeline(resource_groups=[
                _rg("rg1", Step(name="step1")),
                _rg("rg2", Step(name="step2", depends_on=["step3"])),
            ]),
            DanglingDependencyError,
            "invalid dependency on step step2: dependency step3 does not exist",
            id="missing step dependency",
        ),
        pytest.param(
            Pipeline(resource_groups=[
                _rg("rg1", Step(name="step1")),
                _rg("rg2", Step(name="step1")),
            ]),
            DuplicateStepError,
            'duplicate step name "step1"',
            id="duplicate step name",
        ),
        pytest.param(
            Pipeline(resource_groups=[
                _rg("rg1", Step(name="step1"), Step(name="step1")),
            ]),
            DuplicateStepError,
            'duplicate step name "step1"',
            id="duplicate step name in one group",
        ),
    ],
)
def test_pipeline_validate_errors(pipeline, error_type, message):
    with pytest.raises(error_type) as exc_info:
        pipeline.validate()
    assert str(exc_info.value) == message


@pytest.mark.parametrize(
    "pipeline",
    [
        pytest.param(Pipeline(), id="empty pipeline"),
        pytest.param(Pipeline(resource_groups=[_rg("rg1")]), id="group without steps"),
        pytest.param(
            Pipeline(resource_groups=[
                _rg("rg1", Step(name="step1")),
                _rg("rg2", Step(name="step2", depends_on=["step1"])),
            ]),
            id="valid step dependencies",
        ),
        pytest.param(
            Pipeline(resource_groups=[
                _rg("rg1", Step(name="step1", depends_on=["step2"])),
                _rg("rg2", Step(name="step2")),
            ]),
            id="forward reference across groups",
        ),
        pytest.param(
            Pipeline(resource_groups=[
                _rg("rg1", Step(name="a", depends_on=["b"]), Step(name="b", depends_on=["a"])),
            ]),
            id="cycles are not rejected",
        ),
    ],
)
def test_pipeline_validate_ok(pipeline):
    pipeline.validate()


def test_resource_group_checks_run_before_step_checks():
    pipeline = Pipeline(resource_groups=[
        _rg("rg1", Step(name="step1"), Step(name="step1")),
        ResourceGroup(name="rg2"),
    ])
    with pytest.raises(MissingFieldError, match="^subscription is required$"):
        pipeline.validate()


def test_duplicates_are_reported_before_dangling_dependencies():
    pipeline = Pipeline(resource_groups=[
        _rg("rg1", Step(name="step1", depends_on=["missing"])),
        _rg("rg2", Step(name="step2"), Step(name="step2")),
    ])
    with pytest.raises(DuplicateStepError) as exc_info:
        pipeline.validate()
    assert exc_info.value.step_name == "step2"


def test_first_dangling_dependency_is_reported():
    pipeline = Pipeline(resource_groups=[
        _rg("rg1", Step(name="step1", depends_on=["x", "y"])),
        _rg("rg2", Step(name="step2", depends_on=["z"])),
    ])
    with pytest.raises(DanglingDependencyError) as exc_info:
        pipeline.validate()
    assert (exc_info.value.step_name, exc_info.value.dependency) == ("step1", "x")


def test_from_dict_maps_document_fields():
    pipeline = Pipeline.from_dict({
        "$schema": "pipeline.schema.v1",
        "serviceGroup": "svc",
        "rolloutName": "rollout",
        "resourceGroups": [
            {
                "name": "rg",
                "subscription": "sub",
                "aksCluster": "aks",
                "steps": [
                    {
                        "name": "deploy",
                        "action": "ARM",
                        "template": "main.bicep",
                        "parameters": "main.bicepparam",
                        "deploymentLevel": "ResourceGroup",
                    },
                    {
                        "name": "configure",
                        "action": "Shell",
                        "command": "make",
                        "dependsOn": ["deploy"],
                        "variables": [{"name": "REGION", "configRef": "region"}],
                    },
                ],
            },
        ],
    })

    assert pipeline.schema_ref == "pipeline.schema.v1"
    assert (pipeline.service_group, pipeline.rollout_name) == ("svc", "rollout")
    rg = pipeline.resource_groups[0]
    assert rg.aks_cluster == "aks"
    deploy, configure = rg.steps
    assert deploy.deployment_level == "ResourceGroup"
    assert configure.depends_on == ["deploy"]
    assert configure.variables[0].config_ref == "region"
    assert configure.variables[0].value is None
    assert [step.name for _, step in pipeline.steps()] == ["deploy", "configure"]
    assert pipeline.step_names() == {"deploy", "configure"}


@pytest.mark.parametrize(
    "document, field, message",
    [
        pytest.param(
            {"resourceGroups": "abc"},
            "resourceGroups",
            "resourceGroups must be a list, got str",
            id="resource groups not a list",
        ),
        pytest.param(
            {"resourceGroups": [1]},
            "resourceGroups[0]",
            "resourceGroups[0] must be a mapping, got int",
            id="resource group not a mapping",
        ),
        pytest.param(
            {"resourceGroups": [{"name": "rg", "steps": [{"name": "a", "dependsOn": "ab"}]}]},
            "resourceGroups[0].steps[0].dependsOn",
            "resourceGroups[0].steps[0].dependsOn must be a list, got str",
            id="dependsOn not a list",
        ),
        pytest.param(
            {"resourceGroups": [{"name": "rg", "steps": [{"name": "a", "dependsOn": [["b"]]}]}]},
            "resourceGroups[0].steps[0].dependsOn[0]",
            "resourceGroups[0].steps[0].dependsOn[0] must be a string, got list",
            id="dependency not a string",
        ),
        pytest.param(
            {"resourceGroups": [{"name": "rg", "steps": [{"name": ["a"]}]}]},
            "resourceGroups[0].steps[0].name",
            "resourceGroups[0].steps[0].name must be a string, got list",
            id="step name not a string",
        ),
        pytest.param(
            {"resourceGroups": [{"name": "rg", "steps": [{"name": "a", "variables": ["X"]}]}]},
            "resourceGroups[0].steps[0].variables[0]",
            "resourceGroups[0].steps[0].variables[0] must be a mapping, got str",
            id="variable not a mapping",
        ),
        pytest.param(
            {"serviceGroup": 3},
            "serviceGroup",
            "serviceGroup must be a string, got int",
            id="service group not a string",
        ),
    ],
)
def test_from_dict_rejects_wrong_shapes(document, field, message):
    with pytest.raises(InvalidFieldError) as exc_info:
        Pipeline.from_dict(document)
    assert exc_info.value.field == field
    assert str(exc_info.value) == message


def test_from_dict_null_name_is_reported_as_missing():
    pipeline = Pipeline.from_dict({"resourceGroups": [{"name": None, "subscription": "sub"}]})
    with pytest.raises(MissingFieldError, match="^resource group name is required$"):
        pipeline.validate()
