from media_export.cli import app

app(prog_name="media-export")
