import logging

import yaml

from clab_editor.utils.constants import SUBSTEP_INDENT

INLINE_LIST_LENGTH = 2

logger = logging.getLogger(__name__)


class YAMLProcessor:
    class CustomDumper(yaml.SafeDumper):
        """
        Custom YAML dumper that keeps link endpoint pairs inline and preserves
        mapping order, so node records are written back in the order they
        were edited.
        """

    def custom_list_representer(self, dumper, data):
        # Keep ["node:iface", "node:iface"] endpoint pairs on one line
        if (
            len(data) == INLINE_LIST_LENGTH
            and all(isinstance(item, str) and ":" in item for item in data)
        ):
            return dumper.represent_sequence(
                "tag:yaml.org,2002:seq", data, flow_style=True
            )
        return dumper.represent_sequence(
            "tag:yaml.org,2002:seq", data, flow_style=False
        )

    def custom_dict_representer(self, dumper, data):
        return dumper.represent_dict(data.items())

    def __init__(self):
        self.CustomDumper.add_representer(list, self.custom_list_representer)
        self.CustomDumper.add_representer(tuple, self.custom_list_representer)
        self.CustomDumper.add_representer(dict, self.custom_dict_representer)

    def load_yaml(self, yaml_str):
        try:
            return yaml.safe_load(yaml_str)
        except yaml.YAMLError as e:
            logger.error(f"Error loading YAML: {e!s}")
            raise

    def dump_yaml(self, data) -> str:
        return yaml.dump(
            data,
            Dumper=self.CustomDumper,
            sort_keys=False,
            default_flow_style=False,
            indent=2,
        )

    def save_yaml(self, data, output_file):
        try:
            with open(output_file, "w") as file:
                file.write(self.dump_yaml(data))
            logger.info(f"{SUBSTEP_INDENT}YAML file saved as '{output_file}'.")
        except OSError as e:
            logger.error(f"Error saving YAML file: {e!s}")
            raise
