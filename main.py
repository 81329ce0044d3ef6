from conductor import *


class HelloCommand(Command):
    """Say hello to someone."""

    def execute(self, input, output):
        output.success("Hello, %s!" % input.get_opt("name", "world"))


class SiteController(Controller):
    """Site management commands."""

    def about_command(self, input, output):
        """Show the about information."""
        output.panel({"Group": self.name, "Script": input.script}, title="about")

    def clear_cache_command(self, input, output):
        """Clear the site cache."""
        output.lite_success("cache cleared")


def status():
    """Print the application status."""
    print("all green")


if __name__ == '__main__':
    app = Application("demo", "1.0.0", "Conductor demo application", shell=True, fancy=True)
    app.command(HelloCommand)
    app.command("status", status)
    app.controller(SiteController)
    app.run()
