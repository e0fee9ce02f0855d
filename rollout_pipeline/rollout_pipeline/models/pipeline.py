# Copyright 2026 TIER IV, inc.
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.

"""Typed rollout pipeline model and its semantic validation.

Step names form a single namespace across the whole pipeline: a step may
depend on any step of any resource group, declared before or after it.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Iterator, List, Optional, Set, Tuple

from ..exceptions import (
    DanglingDependencyError,
    DuplicateStepError,
    InvalidFieldError,
    MissingFieldError,
)


# Schemas injected through a custom registry may be looser than the bundled
# one, so document shapes are checked again while building the model.
def _mapping(value: Any, path: str) -> Dict[str, Any]:
    if not isinstance(value, dict):
        raise InvalidFieldError(path, "a mapping", value)
    return value


def _list(data: Dict[str, Any], key: str, path: str) -> List[Any]:
    value = data.get(key)
    if value is None:
        return []
    if not isinstance(value, list):
        raise InvalidFieldError(f"{path}.{key}" if path else key, "a list", value)
    return value


def _string(data: Dict[str, Any], key: str, path: str, default: Optional[str] = "") -> Optional[str]:
    value = data.get(key, default)
    if value is not None and not isinstance(value, str):
        raise InvalidFieldError(f"{path}.{key}" if path else key, "a string", value)
    return value


@dataclass
class Variable:
    """Environment variable handed to a shell step."""
    name: str
    value: Optional[str] = None
    config_ref: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Any, path: str = "variable") -> "Variable":
        data = _mapping(data, path)
        return cls(
            name=_string(data, "name", path),
            value=_string(data, "value", path, None),
            config_ref=_string(data, "configRef", path, None),
        )


@dataclass
class Step:
    name: str = ""
    action: str = ""
    depends_on: List[str] = field(default_factory=list)

    # Shell
    command: Optional[str] = None
    variables: List[Variable] = field(default_factory=list)

    # ARM
    template: Optional[str] = None
    parameters: Optional[str] = None
    deployment_level: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Any, path: str = "step") -> "Step":
        data = _mapping(data, path)
        depends_on = _list(data, "dependsOn", path)
        for idx, dependency in enumerate(depends_on):
            if not isinstance(dependency, str):
                raise InvalidFieldError(f"{path}.dependsOn[{idx}]", "a string", dependency)
        return cls(
            name=_string(data, "name", path),
            action=_string(data, "action", path),
            depends_on=list(depends_on),
            command=_string(data, "command", path, None),
            variables=[
                Variable.from_dict(v, f"{path}.variables[{idx}]")
                for idx, v in enumerate(_list(data, "variables", path))
            ],
            template=_string(data, "template", path, None),
            parameters=_string(data, "parameters", path, None),
            deployment_level=_string(data, "deploymentLevel", path, None),
        )


@dataclass
class ResourceGroup:
    name: str = ""
    subscription: str = ""
    aks_cluster: Optional[str] = None
    steps: List[Step] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: Any, path: str = "resourceGroup") -> "ResourceGroup":
        data = _mapping(data, path)
        return cls(
            name=_string(data, "name", path),
            subscription=_string(data, "subscription", path),
            aks_cluster=_string(data, "aksCluster", path, None),
            steps=[
                Step.from_dict(s, f"{path}.steps[{idx}]")
                for idx, s in enumerate(_list(data, "steps", path))
            ],
        )

    def validate(self) -> None:
        """Check the fields every resource group must carry.

        Raises:
            MissingFieldError: If the name or the subscription is empty
        """
        if not self.name:
            raise MissingFieldError("name", "resource group name is required")
        if not self.subscription:
            raise MissingFieldError("subscription", "subscription is required")


@dataclass
class Pipeline:
    service_group: str = ""
    rollout_name: str = ""
    resource_groups: List[ResourceGroup] = field(default_factory=list)
    schema_ref: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Any) -> "Pipeline":
        """Build the typed model from a schema-validated document.

        Raises:
            InvalidFieldError: If a field does not have the shape of the model
        """
        data = _mapping(data, "pipeline")
        return cls(
            service_group=_string(data, "serviceGroup", ""),
            rollout_name=_string(data, "rolloutName", ""),
            resource_groups=[
                ResourceGroup.from_dict(rg, f"resourceGroups[{idx}]")
                for idx, rg in enumerate(_list(data, "resourceGroups", ""))
            ],
            schema_ref=_string(data, "$schema", "", None),
        )

    def steps(self) -> Iterator[Tuple[ResourceGroup, Step]]:
        """Yield (resource group, step) pairs in declaration order."""
        for rg in self.resource_groups:
            for step in rg.steps:
                yield rg, step

    def step_names(self) -> Set[str]:
        return {step.name for _, step in self.steps()}

    def validate(self) -> None:
        """Validate resource groups and the cross-group step dependencies.

        Checks run in a fixed order and the first violation is raised:
        resource group fields, then duplicate step names, then dependencies
        on undeclared steps. Dependency cycles are not checked.

        Raises:
            MissingFieldError: If a resource group lacks its name or subscription
            DuplicateStepError: If two steps share a name
            DanglingDependencyError: If a step depends on an undeclared step
        """
        for rg in self.resource_groups:
            rg.validate()

        step_names: Set[str] = set()
        for _, step in self.steps():
            if step.name in step_names:
                raise DuplicateStepError(step.name)
            step_names.add(step.name)

        for _, step in self.steps():
            for dependency in step.depends_on:
                if dependency not in step_names:
                    raise DanglingDependencyError(step.name, dependency)
