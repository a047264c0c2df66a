import json
import os

from mergedeep import merge


def load(filename):
    # raises if the file doesn't exist
    with open(filename) as file:
        return json.load(file)


def load_or_empty(filename):
    if not os.path.exists(filename):
        return {}
    return load(filename)


def save(filename, content):
    directory = os.path.dirname(filename)
    if directory:
        os.makedirs(directory, exist_ok=True)
    with open(filename, "w") as outfile:
        json.dump(content, outfile, indent=2)

    return filename


def merge_save(filename, content):
    # deep-merges `content` into whatever is already stored
    merged = merge({}, load_or_empty(filename), content)
    save(filename, merged)
    return merged
