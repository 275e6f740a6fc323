"""
Helper command definitions for the platform nudges.

Every command moves the pointer one pixel diagonally, holds it there for a
few milliseconds, then puts it back where it was.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List


NUDGE_PIXELS = 1
HOLD_MILLISECONDS = 10


@dataclass(frozen=True)
class HelperCommand:
    """An external program plus the arguments that perform one nudge."""
    executable: str
    args: List[str] = field(default_factory=list)
    hint: str = ""

    def argv(self) -> List[str]:
        return [self.executable, *self.args]


APPLESCRIPT_NUDGE = f"""
tell application "System Events"
    set currentPos to (get position of mouse)
    set mouseX to item 1 of currentPos
    set mouseY to item 2 of currentPos
    set mouse position to {{mouseX + {NUDGE_PIXELS}, mouseY + {NUDGE_PIXELS}}}
    delay {HOLD_MILLISECONDS / 1000:g}
    set mouse position to {{mouseX, mouseY}}
end tell
"""

POWERSHELL_NUDGE = f"""
Add-Type -TypeDefinition '
    using System;
    using System.Runtime.InteropServices;
    public class Win32 {{
        [DllImport("user32.dll")]
        public static extern bool GetCursorPos(out POINT lpPoint);
        [DllImport("user32.dll")]
        public static extern bool SetCursorPos(int x, int y);
        public struct POINT {{ public int x; public int y; }}
    }}
';
$pos = New-Object Win32+POINT;
[Win32]::GetCursorPos([ref]$pos) | Out-Null;
[Win32]::SetCursorPos($pos.x + {NUDGE_PIXELS}, $pos.y + {NUDGE_PIXELS}) | Out-Null;
Start-Sleep -Milliseconds {HOLD_MILLISECONDS};
[Win32]::SetCursorPos($pos.x, $pos.y) | Out-Null;
"""

MACOS_HINT = "Try 'brew install cliclick' or grant accessibility permissions"

CLICLICK = HelperCommand(
    executable="cliclick",
    args=[
        f"m:+{NUDGE_PIXELS},+{NUDGE_PIXELS}",
        f"w:{HOLD_MILLISECONDS}",
        f"m:-{NUDGE_PIXELS},-{NUDGE_PIXELS}",
    ],
    hint=MACOS_HINT,
)

OSASCRIPT = HelperCommand(
    executable="osascript",
    args=["-e", APPLESCRIPT_NUDGE],
    hint=MACOS_HINT,
)

POWERSHELL = HelperCommand(
    executable="powershell",
    args=["-NoProfile", "-NonInteractive", "-Command", POWERSHELL_NUDGE],
    hint="Check that PowerShell is installed and allowed to run inline scripts",
)

PYAUTOGUI_HINT = "Install PowerShell or the 'pyautogui' package"
