# bake_noise.py

"""
================================================================================
OFFLINE NOISE BAKER SCRIPT
================================================================================
This script is a command-line tool for rendering one or more fractal noise
fields to grayscale PNG images ("baking"), together with a manifest that
records the exact settings each image was generated from.

Usage:
    python bake_noise.py --config path/to/your/config.json

Config format:
    {
      "noise_parameters": {"frequency": 8.1, "octaves": 3, ...},
      "fields": [
        {"name": "perlin_2d"},
        {"name": "value_1d", "method": "value", "dimensions": 1}
      ]
    }
Entries in "fields" override "noise_parameters" for that field only. If
"fields" is missing, a single field named "noise" is baked.
================================================================================
"""
import os
import sys
import json
import logging
import argparse
import time
import multiprocessing
from tqdm import tqdm

from procedural_noise.generator import FieldGenerator
from procedural_noise import image_export
from procedural_noise import config as DEFAULTS

# --- Global variables for worker processes ---
worker_output_dir = None

def init_worker(output_dir):
    """Initializes the global state for each worker process."""
    global worker_output_dir
    worker_output_dir = output_dir

def process_field(job: dict) -> dict:
    """
    Generates and SAVES a single field. Returns only minimal metadata.
    """
    name = job['name']
    worker_logger = logging.getLogger(f"Worker-{os.getpid()}")
    try:
        generator = FieldGenerator(config=job['config'], logger=worker_logger)
        field = generator.generate_field()
        file_path = image_export.save_field_image(field, worker_output_dir, name)
        return {'name': name, 'file': os.path.basename(file_path), 'settings': generator.settings}
    except Exception as e:
        # Use exc_info=True to log the full traceback from the worker process
        worker_logger.critical(f"An exception occurred while baking field '{name}': {e}", exc_info=True)
        return {'name': name, 'file': None, 'settings': job['config']}

def build_jobs(config: dict, logger: logging.Logger) -> list:
    """Merges the shared noise parameters into each field entry."""
    shared = config.get('noise_parameters', {})
    fields = config.get('fields') or [{'name': 'noise'}]

    jobs = []
    seen_names = set()
    for index, entry in enumerate(fields):
        entry = dict(entry)
        name = entry.pop('name', f"field_{index}")
        if name in seen_names:
            logger.warning(f"Duplicate field name '{name}'; the later entry overwrites the earlier image.")
        seen_names.add(name)
        jobs.append({'name': name, 'config': {**shared, **entry}})
    return jobs

# --- Main Baking Function ---
def bake_noise(config_path: str, output_dir: str = None, num_workers: int = None) -> int:
    """
    Loads a configuration, generates every field it describes, and saves
    them as PNG images plus a manifest.json to the output directory.

    Returns:
        int: A process exit status, 0 on success.
    """
    logger = logging.getLogger("NoiseBaker")

    # 1. --- Load Configuration ---
    logger.info(f"Loading configuration from: {config_path}")
    try:
        with open(config_path, 'r') as f:
            config = json.load(f)
    except (FileNotFoundError, json.JSONDecodeError) as e:
        logger.critical(f"Failed to load or parse config file: {e}")
        return 1

    if output_dir is None:
        output_dir = config.get('output_dir', DEFAULTS.DEFAULT_OUTPUT_DIR)
    os.makedirs(output_dir, exist_ok=True)

    jobs = build_jobs(config, logger)
    if num_workers is None:
        num_workers = min(len(jobs), multiprocessing.cpu_count() - 1)
    num_workers = max(1, num_workers)

    # 2. --- Main Baking Loop ---
    logger.info(f"Baking {len(jobs)} field(s) to '{output_dir}' using {num_workers} worker(s)...")
    start_time = time.perf_counter()
    results = []

    if num_workers == 1:
        init_worker(output_dir)
        for job in tqdm(jobs, desc="Baking Fields"):
            results.append(process_field(job))
    else:
        with multiprocessing.Pool(processes=num_workers, initializer=init_worker, initargs=(output_dir,)) as pool:
            for result in tqdm(pool.imap_unordered(process_field, jobs), total=len(jobs), desc="Baking Fields"):
                results.append(result)

    # --- Finalization ---
    results.sort(key=lambda r: r['name'])
    failed = [r['name'] for r in results if r['file'] is None]
    manifest = {
        'fields': {r['name']: {'file': r['file'], 'settings': r['settings']} for r in results if r['file'] is not None}
    }
    manifest_path = os.path.join(output_dir, "manifest.json")
    with open(manifest_path, 'w') as f:
        json.dump(manifest, f, indent=2)

    end_time = time.perf_counter()
    logger.info(f"Baking complete! Total time: {end_time - start_time:.2f} seconds.")
    if failed:
        logger.error(f"{len(failed)} field(s) failed: {', '.join(failed)}")
        return 1
    logger.info(f"Baked fields and manifest.json saved to: {output_dir}")
    return 0


# --- Command-Line Interface ---
def main(argv=None) -> int:
    parser = argparse.ArgumentParser(description="Offline baker for procedural noise fields.")
    parser.add_argument(
        "--config",
        type=str,
        required=True,
        help="Path to the JSON configuration file describing the fields to bake."
    )
    parser.add_argument(
        "--output",
        type=str,
        default=None,
        help="Output directory. Overrides 'output_dir' in the config file."
    )
    parser.add_argument(
        "--workers",
        type=int,
        default=None,
        help="Number of worker processes. Defaults to one less than the CPU count."
    )
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.INFO,
        format='%(asctime)s - %(levelname)s - %(message)s',
        stream=sys.stdout
    )
    return bake_noise(args.config, args.output, args.workers)

if __name__ == "__main__":
    sys.exit(main())
