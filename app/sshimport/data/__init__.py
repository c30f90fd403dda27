"""Bundled data files for sshimport."""
