import json
import logging
import os


logger = logging.getLogger(__name__)

SAVE_PATH = "save.json"


class StorageError(ValueError):
    pass


def load_state(path=SAVE_PATH):
    if not os.path.exists(path):
        return None
    with open(path, "r", encoding="utf-8") as f:
        try:
            data = json.load(f)
        except json.JSONDecodeError as e:
            raise StorageError(f"{path} is not valid JSON: {e}") from e
    if not isinstance(data, dict):
        raise StorageError(f"{path} does not hold a JSON object")
    return data


def save_state(state, path=SAVE_PATH):
    with open(path, "w", encoding="utf-8") as f:
        json.dump(state, f, indent=2)
    logger.debug("saved state to %s", path)


def load_top_score(path=SAVE_PATH):
    data = load_state(path)
    if data is None:
        return 0
    top_score = data.get("top_score", 0)
    if not isinstance(top_score, int) or top_score < 0:
        raise StorageError(f"{path} has an invalid top_score: {top_score!r}")
    return top_score


def save_top_score(top_score, path=SAVE_PATH):
    save_state({"top_score": top_score}, path)
