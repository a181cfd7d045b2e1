"""Shared test helpers for schmiede tests."""

from pathlib import Path

from schmiede.config import Config, Database, DatabaseDriver

CARGO_TOML = """\
[package]
name = "demo"
version = "0.1.0"
edition = "2021"

# web stack
[dependencies]
axum = "0.7.4"
serde = { version = "1.0", features = ["derive"] }
tokio = { version = "1", features = ["full"] }
"""

CONFIG_MOD_RS = """\
use config::{Config, ConfigError};
use serde::Deserialize;

#[derive(Deserialize, Clone)]
pub struct Settings {
    pub application: ApplicationSettings,
}

#[derive(Deserialize, Clone)]
pub struct ApplicationSettings {
    pub port: u16,
    pub host: String,
}
"""

STARTUP_RS = """\
use anyhow::{Context, Result};
use axum::Router;

use crate::config::Settings;
use crate::routes::routes as api_routes;

pub async fn build(settings: Settings) -> Result<()> {
    let app = Router::new()
        .nest("/api", api_routes())
        .layer(TraceLayer::new_for_http());
    serve(app, settings).await
}
"""

ROUTES_MOD_RS = """\
use axum::Router;

mod health_check;

pub fn routes() -> Router {
    Router::new().merge(health_check::router())
}
"""

BASE_YAML = """\
application:
  port: 8000
  host: 0.0.0.0
"""


def make_test_config(
    driver: DatabaseDriver | None = DatabaseDriver.SQLX,
) -> Config:
    """Create a Config for tests with a postgres database by default."""
    return Config(
        database=Database.POSTGRES if driver is not None else None,
        database_driver=driver,
    )


def write_project(root: Path, base_yaml: bool = True) -> Path:
    """Lay out the files of a fresh axum starter under ``root``."""
    files = {
        "Cargo.toml": CARGO_TOML,
        "src/config/mod.rs": CONFIG_MOD_RS,
        "src/startup.rs": STARTUP_RS,
        "src/routes/mod.rs": ROUTES_MOD_RS,
    }
    if base_yaml:
        files["configuration/base.yaml"] = BASE_YAML
    for relative, content in files.items():
        path = root / relative
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content)
    return root
