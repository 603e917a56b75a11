"""
kubestate - persistent context and namespace state for a cluster client.

Tracks which kubeconfig context and namespace are active, reconciles
command-line overrides with the saved state, and persists it as YAML.
"""

__version__ = "0.1.0"
