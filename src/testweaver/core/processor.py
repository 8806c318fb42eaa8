from __future__ import annotations

from pathlib import Path

import yaml

from testweaver.core import paths
from testweaver.core.config import EffectiveConfig
from testweaver.core.generator import generate_test_code
from testweaver.core.logger import get_logger, verbose

log = get_logger("processor")


def process_file(path: str | Path, config: EffectiveConfig) -> bool:
    """Generate the ``.test.js`` skeleton for one YAML file. Returns False on any per-file failure."""
    source = Path(path)
    try:
        content = yaml.safe_load(source.read_text(encoding="utf-8"))
    except OSError as exc:
        log.error("could not read '%s': %s", source, exc)
        return False
    except UnicodeDecodeError as exc:
        log.error("could not decode '%s' as utf-8: %s", source, exc)
        return False
    except yaml.YAMLError as exc:
        log.error("could not parse yaml in '%s': %s", source, exc)
        return False

    if not isinstance(content, (dict, list)) or not content:
        log.warning("no test definitions found in '%s'. skipping.", source)
        return False

    try:
        code = generate_test_code(content, config.test_keyword)
    except (ValueError, RecursionError) as exc:
        log.error("could not generate tests for '%s': %s", source, exc)
        return False
    output = paths.output_path_for(source)

    if config.is_dry_run:
        log.info("[dry run] would write %s", output)
        verbose(log, "%s", code)
        return True

    try:
        output.write_text(code, encoding="utf-8")
    except OSError as exc:
        log.error("could not write '%s': %s", output, exc)
        return False
    log.info("generated %s", output)
    return True
