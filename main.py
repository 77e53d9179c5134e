import sys
from pathlib import Path

from luna import *

reporter = Reporter()


@command("ban", aliases=["suspend"], parameters=["user", "optional: days", "optional: reason"], restricted=True)
def ban(context):
    """Bans a user from the server"""
    days = context.parameters.get("days") or "an unlimited number of"
    reason = context.parameters.get("reason") or "no reason given"
    reporter.severe("%s has been banned for %s days (%s)." % (context.parameters["user"], days, reason))


@command("kick", parameters=["user", "optional: reason"], dependencies=["ban"], restricted=True)
def kick(context):
    """Kicks a user from the server"""
    reporter.info("%s has been kicked." % context.parameter)
    if "ban" in context.dependencies:
        reporter.info("use %r to keep them out." % context.dependencies["ban"].caller("luna"))


@command("volume", aliases=["vol"], parameters=["optional: level"])
def volume(context):
    """Shows or changes the playback volume"""
    if context.parameter is None:
        reporter.info("the volume is at 50%.")
    else:
        reporter.info("the volume is now at %s%%." % context.parameter)


@command("say", parameters=["text"])
def say(context):
    """Repeats what you said"""
    reporter.info(context.parameter or "...")


def main():
    path = Path("config.json")
    settings = Settings.load(path) if path.exists() else Settings(aliasless_channels={"console"})
    configure_logging(settings.level)

    catalog = Catalog.from_modules([
        Module("Information", [help_command(reporter, alias=settings.alias)]),
        Module("Moderation", [ban, kick], requirement=lambda message: message.author == "console"),
        Module("Music", [volume]),
        Module("Fun", [say]),
    ])
    engine = Engine(catalog, settings, identity="luna")

    for line in sys.stdin:
        reporter.report(engine.process(Message(line, "console", "console")))


if __name__ == '__main__':
    main()
