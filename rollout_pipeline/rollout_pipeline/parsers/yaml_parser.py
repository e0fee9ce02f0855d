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

"""YAML/JSON pipeline document parser."""

import json
import logging
from pathlib import Path
from typing import Any, Dict, Tuple, Union

import yaml

from ..exceptions import PipelineParseError

logger = logging.getLogger(__name__)

SourceMap = Dict[str, Dict[str, int]]
Content = Union[str, bytes]


class YamlParser:
    """Loads pipeline documents into loosely-typed mappings.

    JSON input is accepted as well. JSON that PyYAML rejects (e.g. tab
    indentation) is parsed with the json module instead.
    """

    @staticmethod
    def _json_pointer_escape(token: str) -> str:
        # JSON Pointer escaping: "~" -> "~0", "/" -> "~1"
        return token.replace("~", "~0").replace("/", "~1")

    @staticmethod
    def _decode(content: Content) -> str:
        if isinstance(content, bytes):
            try:
                return content.decode("utf-8")
            except UnicodeDecodeError as exc:
                raise PipelineParseError(f"Pipeline content is not valid UTF-8: {exc}") from exc
        return content

    @classmethod
    def build_source_map(cls, content: str) -> SourceMap:
        """Build a mapping from JSON-pointer paths to 1-based line/column.

        This uses PyYAML's node tree (yaml.compose) so locations are tracked
        without changing the data shapes returned by safe_load.
        """
        source_map: SourceMap = {}

        try:
            root = yaml.compose(content, Loader=yaml.SafeLoader)
        except yaml.YAMLError:
            # Parsing errors are reported by safe_load.
            return source_map

        if root is None:
            return source_map

        def _walk(node, path: str) -> None:
            mark = node.start_mark
            # PyYAML uses 0-based line/column
            source_map[path] = {"line": mark.line + 1, "column": mark.column + 1}

            if isinstance(node, yaml.nodes.MappingNode):
                for key_node, value_node in node.value:
                    child_path = f"{path}/{cls._json_pointer_escape(str(key_node.value))}"
                    _walk(value_node, child_path)
            elif isinstance(node, yaml.nodes.SequenceNode):
                for idx, item_node in enumerate(node.value):
                    _walk(item_node, f"{path}/{idx}")

        _walk(root, "")
        return source_map

    def load_document(self, content: Content) -> Dict[str, Any]:
        """Load a pipeline document from YAML or JSON content.

        Args:
            content: Document source as text or UTF-8 bytes

        Returns:
            Parsed document; an empty document yields an empty mapping

        Raises:
            PipelineParseError: If the content cannot be parsed or is not a mapping
        """
        text = self._decode(content)
        try:
            document = yaml.safe_load(text)
        except yaml.YAMLError as exc:
            try:
                document = json.loads(text)
            except ValueError:
                raise PipelineParseError(f"Failed to parse pipeline content: {exc}") from exc
            logger.debug("Pipeline content parsed as JSON")

        if document is None:
            return {}
        if not isinstance(document, dict):
            raise PipelineParseError(
                f"Pipeline document must be a mapping, got {type(document).__name__}"
            )
        return document

    def load_document_with_source(self, content: Content) -> Tuple[Dict[str, Any], SourceMap]:
        """Load a pipeline document and return (document, source_map)."""
        text = self._decode(content)
        document = self.load_document(text)
        return document, self.build_source_map(text)

    def load_file(self, file_path: Union[str, Path]) -> Tuple[Dict[str, Any], SourceMap]:
        """Load a pipeline file and return (document, source_map).

        Raises:
            PipelineParseError: If the file cannot be read or parsed
        """
        path = Path(file_path)

        if not path.exists():
            raise PipelineParseError(f"Pipeline file not found: {path}")

        if not path.is_file():
            raise PipelineParseError(f"Path is not a file: {path}")

        logger.debug(f"Loading pipeline file: {path}")
        try:
            content = path.read_bytes()
        except OSError as exc:
            raise PipelineParseError(f"Failed to read pipeline file {path}: {exc}") from exc
        return self.load_document_with_source(content)


yaml_parser = YamlParser()
