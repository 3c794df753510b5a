from dataclasses import dataclass
from typing import Any, Dict

import yaml

DEFAULT_TARGET_SIZES_PATH = (
    "./alignments/PanWU01x14_asm01.scf.masked.duprm.scaffold_lengths.tsv"
)
DEFAULT_QUERY_SIZES_PATH = (
    "./alignments/TorRG33x02_asm01.scf.masked.duprm.scaffold_lengths.tsv"
)
DEFAULT_ALIGNMENTS_PATH = "./alignments/pantor.minimap.sorted.paf"
DEFAULT_BACK_OUTPUT = "back.png"
DEFAULT_FRONT_OUTPUT = "front.png"

# Canvas geometry is fixed, not configurable
CANVAS_WIDTH = 499
CANVAS_HEIGHT = 709
MARGIN = 40


@dataclass
class RenderConfig:
    """Input and output locations for one render run.

    Attributes:
        target_sizes_path (str): Scaffold lengths of the target assembly (x axis).
        query_sizes_path (str): Scaffold lengths of the query assembly (y axis).
        alignments_path (str): PAF file of query-to-target alignments.
        back_output (str): Where the background panel is written.
        front_output (str): Where the front panel is written.
    """

    target_sizes_path: str = DEFAULT_TARGET_SIZES_PATH
    query_sizes_path: str = DEFAULT_QUERY_SIZES_PATH
    alignments_path: str = DEFAULT_ALIGNMENTS_PATH
    back_output: str = DEFAULT_BACK_OUTPUT
    front_output: str = DEFAULT_FRONT_OUTPUT

    @classmethod
    def from_config(cls, config: Dict[str, Any]) -> "RenderConfig":
        inputs = config.get("inputs", {}) or {}
        outputs = config.get("outputs", {}) or {}

        unknown = set(config) - {"inputs", "outputs"}
        if unknown:
            raise ValueError(f"Unknown config sections: {sorted(unknown)}")

        return cls(
            target_sizes_path=inputs.get("target_sizes", DEFAULT_TARGET_SIZES_PATH),
            query_sizes_path=inputs.get("query_sizes", DEFAULT_QUERY_SIZES_PATH),
            alignments_path=inputs.get("alignments", DEFAULT_ALIGNMENTS_PATH),
            back_output=outputs.get("back", DEFAULT_BACK_OUTPUT),
            front_output=outputs.get("front", DEFAULT_FRONT_OUTPUT),
        )

    def to_yaml_config(self) -> Dict[str, Any]:
        """Convert to the dictionary layout read by from_config."""
        return {
            "inputs": {
                "target_sizes": self.target_sizes_path,
                "query_sizes": self.query_sizes_path,
                "alignments": self.alignments_path,
            },
            "outputs": {
                "back": self.back_output,
                "front": self.front_output,
            },
        }

    def write_config(self, yaml_path: str) -> None:
        """Write this configuration to a YAML file.

        Args:
            yaml_path: Path where the YAML file should be written
        """
        config = self.to_yaml_config()
        with open(yaml_path, "w") as f:
            yaml.dump(config, f, default_flow_style=False)
