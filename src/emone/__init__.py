"""emone: transcribe Latin text into the Emonë zig-zag script."""
