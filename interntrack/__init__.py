"""InternTrack: track internship applications and their events from the terminal."""
