"""Jinja2 templates for the generated Rust sources."""

# mod.rs: module declarations, connection pool and the pagination helper
MOD_TEMPLATE = r"""
use async_static::async_static;
use serde::{Deserialize, Serialize};
use sqlx::{ {{ pool_type }}, Pool };

{% for table_name in table_names %}
mod {{ table_name }};
pub use {{ table_name }}::*;
{% endfor %}

async_static! {
    static ref DB: Pool<{{ pool_type }}> = pool().await.expect("failed to create database pool");
}

async fn pool() -> anyhow::Result<Pool<{{ pool_type }}>> {
    let url = std::env::var("DATABASE_URL")?;
    Ok(sqlx::{{ pool_module }}::{{ pool_constructor }}::connect(&url).await?)
}

/// Paginated result wrapper
#[derive(Debug, Clone, PartialEq, Eq, PartialOrd, Ord, Hash, Serialize, Deserialize)]
pub struct PageRes<T> {
    page: i64,
    page_size: i64,
    total: i64,
    list: Vec<T>,
    first: bool,
    last: bool,
    has_next: bool,
    has_pre: bool,
    total_pages: i64,
}

impl<T> std::default::Default for PageRes<T> {
    fn default() -> Self {
        Self {
            page: 1,
            page_size: 15,
            total: 0,
            list: vec![],
            first: true,
            last: false,
            has_next: false,
            has_pre: false,
            total_pages: 0,
        }
    }
}

impl<T> PageRes<T>
where
    T: Serialize + Clone,
{
    pub fn new(total: i64, mut page: i64, page_size: i64, list: &[T]) -> Self {
        if page <= 0 {
            page = 1;
        }
        let total_pages = (total as f64 / page_size as f64).ceil() as i64;
        Self {
            page,
            page_size,
            total,
            list: list.iter().cloned().collect::<Vec<_>>(),
            first: page == 1,
            last: page == total_pages,
            has_next: page < total_pages,
            has_pre: page > 1,
            total_pages,
        }
    }
}
"""

# <table>.rs: the model struct, its CRUD helpers and the request struct
MODEL_TEMPLATE = r"""
use serde::{Deserialize, Serialize};
use sqlx::FromRow;
use validator::Validate;

use super::DB;
use crate::{error::MineError, result::MineResult};

/// {{ table.comment or '' }}
#[derive(
    Debug,
    Default,
    Clone,
    PartialEq,
    Eq,
    PartialOrd,
    Ord,
    Hash,
    Serialize,
    Deserialize,
    FromRow,
    Validate,
)]
#[serde(rename_all(serialize = "camelCase"))]
pub struct {{ struct_name }} { {% if has_columns %}{% for column in columns %}
    /// {{ column.comment or '' }}
    {% if column.field_type == "String" and column.max_length %}#[validate(length(max = {{ column.max_length }}))]{% endif %}
    pub {{ column.name }}: Option<{{ column.field_type }}>,{% endfor %}{% endif %}
}

impl std::fmt::Display for {{ struct_name }} {
    fn fmt(&self, f: &mut std::fmt::Formatter<'_>) -> std::fmt::Result {
        write!(f, "{}", serde_json::json!(self))
    }
}

impl {{ struct_name }} {
    fn table_name() -> String {
        "{{ table.name }}".to_string()
    }

    fn columns() -> String {
        "{{ column_names }}".to_string()
    }

    pub async fn fetch_by_id(id: u64) -> MineResult<Self> {
        let sql = format!(
            "select {} from {} where id = ?",
            Self::columns(),
            Self::table_name()
        );
        sqlx::query_as::<_, Self>(&sql)
            .bind(id)
            .fetch_one(DB.await)
            .await
            .map_err(|e| {
                log::error!("{e}");
                MineError::SqlError
            })
    }

    pub async fn fetch_all(req: &{{ struct_name }}Req) -> MineResult<Vec<Self>> {
        let mut sql = format!("select {} from {}", Self::columns(), Self::table_name());

        let mut where_sql = " WHERE 1=1 ".to_string();
{% if has_columns %}{% for column in columns %}
        if let Some({{ column.name }}) = &req.{{ column.name }} {
        {%- if column.field_type == "String" %}
            where_sql.push_str(&format!(" and {} like '%{}%' ", "{{ column.name }}", {{ column.name }}));
        {%- else %}
            where_sql.push_str(&format!(" and {} = {} ", "{{ column.name }}", {{ column.name }}));
        {%- endif %}
        }
{% endfor %}{% endif %}
        sql.push_str(&where_sql);

        sqlx::query_as::<_, Self>(&sql)
            .fetch_all(DB.await)
            .await
            .map_err(|e| {
                log::error!("{e}");
                MineError::SqlError
            })
    }

    pub async fn insert(&mut self) -> MineResult<Self> {
        let sql = format!(
            "INSERT INTO {} ({}) VALUES({})",
            Self::table_name(),
            Self::columns(),
            "{{ placeholders }}"
        );
        let id = sqlx::query(&sql)
{%- if has_columns %}{% for column in columns %}
            .bind(&self.{{ column.name }})
{%- endfor %}{% endif %}
            .execute(DB.await)
            .await
            .map_err(|e| {
                log::error!("{e}");
                MineError::SqlError
            })?
            .last_insert_id();
        Self::fetch_by_id(id).await
    }

    pub async fn update(&mut self) -> MineResult<bool> {
        let sql = format!(
            "UPDATE {} SET {} WHERE id = ?",
            Self::table_name(),
            "{{ assignments }}"
        );
        sqlx::query(&sql)
{%- if has_columns %}{% for column in columns %}
            .bind(&self.{{ column.name }})
{%- endfor %}{% endif %}
            .bind(&self.id)
            .execute(DB.await)
            .await
            .map_err(|e| {
                log::error!("{e}");
                MineError::SqlError
            })
            .map(|r| r.rows_affected() > 0)
    }

    pub async fn delete(&self) -> MineResult<bool> {
        let sql = format!("DELETE FROM {} WHERE id = ?", Self::table_name());
        sqlx::query(&sql)
            .bind(&self.id)
            .execute(DB.await)
            .await
            .map_err(|e| {
                log::error!("{e}");
                MineError::SqlError
            })
            .map(|r| r.rows_affected() > 0)
    }

    async fn count(where_sql: &str) -> MineResult<(i64,)> {
        let count_sql = format!(
            "SELECT count(*) FROM {} WHERE {}",
            Self::table_name(),
            where_sql
        );

        sqlx::query_as::<_, (i64,)>(&count_sql)
            .fetch_one(DB.await)
            .await
            .map_err(|e| {
                log::error!("{e}");
                MineError::SqlError
            })
    }

    pub async fn page(req: &{{ struct_name }}Req) -> MineResult<super::PageRes<Self>> {
        let mut where_sql = " 1 = 1 ".to_string();
{% if has_columns %}{% for column in columns %}
        if let Some({{ column.name }}) = &req.{{ column.name }} {
        {%- if column.field_type == "String" %}
            where_sql.push_str(&format!(" and {} like '%{}%' ", "{{ column.name }}", {{ column.name }}));
        {%- else %}
            where_sql.push_str(&format!(" and {} = {} ", "{{ column.name }}", {{ column.name }}));
        {%- endif %}
        }
{% endfor %}{% endif %}
        let (count,) = Self::count(&where_sql).await?;

        let page_size = req.page_size.unwrap_or(20);
        let mut page = req.page.unwrap_or(0) - 1;
        if page < 0 {
            page = 0;
        }
        where_sql.push_str(&format!(" LIMIT {}, {} ", page * page_size, page_size));

        let res = match count > 0 {
            true => {
                let mut sql = format!(
                    "SELECT {} FROM {} WHERE ",
                    Self::columns(),
                    Self::table_name()
                );

                sql.push_str(&where_sql);
                sqlx::query_as::<_, Self>(&sql)
                    .fetch_all(DB.await)
                    .await
                    .map_err(|e| {
                        log::error!("{e}");
                        MineError::SqlError
                    })?
            }
            false => Vec::new(),
        };
        Ok(super::PageRes::new(count, page + 1, page_size, &res))
    }
}

/// {{ table.comment or '' }}
#[derive(
    Debug,
    Default,
    Clone,
    PartialEq,
    Eq,
    PartialOrd,
    Ord,
    Hash,
    Serialize,
    Deserialize,
    Validate,
)]
pub struct {{ struct_name }}Req {
    /// start of the time range
    pub start_at: Option<u64>,
    /// end of the time range
    pub end_at: Option<u64>,
    pub page: Option<i64>,
    pub page_size: Option<i64>,
{% if has_columns %}{% for column in columns %}
    /// {{ column.comment or '' }}
    pub {{ column.name }}: Option<{{ column.field_type }}>,{% endfor %}{% endif %}
}
"""
