"""Built-in default configuration for local-skills."""

# Default configuration that serves as the base for all other configs
DEFAULT_CONFIG = {
    "version": "1.0",
    "settings": {
        "base_dir": ".claude",
        "skills_dir": "skills",
        "manifest_file": "local-skills.json",
        "state_file": "local-skills-state.json",
        "git_executable": "git",
        "temp_dir": None,
        "github_url": "https://github.com",
    },
}
