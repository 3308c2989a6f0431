"""Back up dotfiles into a Git repository and symlink them back."""
