from scenario_batch.cli import entrypoint

if __name__ == "__main__":  # pragma: no cover - console entry
    entrypoint()
