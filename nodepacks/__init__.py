"""Node packs bundled with integration-nodes."""
