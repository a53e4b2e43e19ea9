"""dreamdeploy utilities."""
