"""
Builds the sizr console binary with PyInstaller
"""
import os
import shutil
import subprocess
import sys

EXE_NAME = 'sizr.exe' if sys.platform.startswith('win') else 'sizr'

def build():
    print("Cleaning old builds...")
    for folder in ['build', 'dist']:
        if os.path.exists(folder):
            shutil.rmtree(folder)

    print("Building binary...")

    cmd = [
        'pyinstaller',
        '--onefile',
        '--console',
        '--name', 'sizr',
        '--hidden-import', 'rich',
        '--hidden-import', 'psutil',
        'main.py'
    ]

    result = subprocess.run(cmd, capture_output=True, text=True)

    if result.returncode == 0:
        print("Build finished!")
        print(f"Binary: dist/{EXE_NAME}")

        release_dir = 'release'
        os.makedirs(release_dir, exist_ok=True)

        exe_src = os.path.join('dist', EXE_NAME)
        exe_dst = os.path.join(release_dir, EXE_NAME)
        shutil.copy(exe_src, exe_dst)

        if os.path.exists('README.md'):
            shutil.copy('README.md', os.path.join(release_dir, 'README.md'))

        print(f"Release assembled in: {release_dir}/")
        print("")
        print("Usage examples:")
        print(f"  {exe_dst}                     # Analyze current directory")
        print(f"  {exe_dst} --limit 20          # Show top 20 items")
        print(f"  {exe_dst} --dirs-only         # Show only directories")
        print(f"  {exe_dst} -p ~/Downloads -m 100MB")
    else:
        print("Build failed:")
        print(result.stderr)
        sys.exit(1)

if __name__ == '__main__':
    build()
