"""Rule-based linting for AvaloniaUI XAML and C# sources."""

__version__ = "0.3.0"
