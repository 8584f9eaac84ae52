#!/usr/bin/env python3
"""
Mount Point Management Script for the Media VFS

This script lists, edits and tests mount points through the running API.
"""

import os
import sys

import requests

API_URL = os.getenv("VFS_API_URL", "http://localhost:8000").rstrip("/")


def check_api_status():
    """Check if the API is running"""
    try:
        response = requests.get(f"{API_URL}/health")
        return response.status_code == 200
    except requests.ConnectionError:
        return False


def list_mount_points():
    try:
        response = requests.get(f"{API_URL}/api/mounts/")
        if response.status_code == 200:
            return response.json()
    except requests.RequestException as e:
        print(f"Error listing mount points: {e}")
    return None


def add_mount_point(name, source):
    try:
        response = requests.post(f"{API_URL}/api/mounts/", json={"name": name, "source": source})
        if response.status_code == 200:
            return response.json()
        print(f"Error adding mount point: {response.json().get('detail')}")
    except requests.RequestException as e:
        print(f"Error adding mount point: {e}")
    return None


def reload_mount_points():
    try:
        response = requests.post(f"{API_URL}/api/mounts/reload")
        if response.status_code == 200:
            return response.json()
    except requests.RequestException as e:
        print(f"Error reloading mount points: {e}")
    return None


def translate(direction, path):
    """Translate ``path``; direction is 'real-to-virtual' or 'virtual-to-real'"""
    try:
        response = requests.get(f"{API_URL}/api/mounts/{direction}", params={"path": path})
        if response.status_code == 200:
            return response.json()["result"]
        print(f"No match: {response.json().get('detail')}")
    except requests.RequestException as e:
        print(f"Error translating path: {e}")
    return None


def usage():
    print("Usage:")
    print("  python manage_mounts.py list              - Show active mount points")
    print("  python manage_mounts.py add NAME PATH     - Add or move a mount point")
    print("  python manage_mounts.py reload            - Reload mount points from the database")
    print("  python manage_mounts.py real PATH         - Translate a real path to a virtual path")
    print("  python manage_mounts.py virtual PATH      - Translate a virtual path to a real path")


def main():
    args = sys.argv[1:]
    command = args[0] if args else "list"

    if not check_api_status():
        print(f"API is not running at {API_URL}")
        return

    if command == "list":
        mounts = list_mount_points()
        if mounts is None:
            print("Failed to list mount points")
        elif not mounts:
            print("No mount points configured")
        else:
            for mount in mounts:
                print(f"{mount['name']:<20} {mount['source']}")

    elif command == "add" and len(args) == 3:
        mount = add_mount_point(args[1], args[2])
        if mount:
            print(f"Mounted {mount['source']} as '{mount['name']}'")

    elif command == "reload":
        result = reload_mount_points()
        if result:
            print(f"Loaded {result['mount_count']} mount points")

    elif command == "real" and len(args) == 2:
        result = translate("real-to-virtual", args[1])
        if result:
            print(result)

    elif command == "virtual" and len(args) == 2:
        result = translate("virtual-to-real", args[1])
        if result:
            print(result)

    else:
        usage()


if __name__ == "__main__":
    main()
