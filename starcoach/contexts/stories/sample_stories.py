"""Sample stories bundled with the package, for seeding a new story bank."""

from pathlib import Path
from typing import List

from omegaconf import OmegaConf

from starcoach.contexts.stories.story_data_structure import Story

SAMPLE_STORIES_PATH = Path(__file__).resolve().parents[2] / "data" / "sample_stories.yaml"


def load_sample_stories(config_path: Path = None) -> List[Story]:
    """
    Load the bundled sample stories.

    Args:
        config_path: Optional YAML file with a top-level `stories` list
                     (defaults to the packaged sample_stories.yaml)

    Returns:
        Stories in file order
    """
    if config_path is None:
        config_path = SAMPLE_STORIES_PATH

    data = OmegaConf.to_container(OmegaConf.load(config_path), resolve=True)
    return [Story.from_dict(entry) for entry in data.get("stories", [])]
